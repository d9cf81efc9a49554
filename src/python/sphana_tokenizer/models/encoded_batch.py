import numpy as np
from pydantic import BaseModel, ConfigDict, Field

class EncodedBatch(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    input_ids: np.ndarray = Field(..., description="Token ids, int64 matrix [batch_size, max_row_length]")
    segment_ids: np.ndarray = Field(..., description="Segment ids, int64 matrix [batch_size, max_row_length]")
    attention_mask: np.ndarray = Field(..., description="1 for real tokens and 0 for padding, int64 matrix [batch_size, max_row_length]")

    @property
    def batch_size(self) -> int:
        return int(self.input_ids.shape[0])

    @property
    def max_row_length(self) -> int:
        return int(self.input_ids.shape[1])

    def to_model_inputs(self) -> dict[str, np.ndarray]:
        return {
            "input_ids": self.input_ids,
            "attention_mask": self.attention_mask,
            "token_type_ids": self.segment_ids
        }
