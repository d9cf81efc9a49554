from pydantic import BaseModel, Field, model_validator
from sphana_tokenizer.utils.alignment_util import AlignmentUtil

class AlignedSpan(BaseModel):
    text: str = Field(..., description="The (possibly lossy) text of the span")
    start: int = Field(..., ge=0, description="Offset of the first character of the span in the original text")
    last_start: int = Field(..., ge=0, description="Offset of the start of the last word of the span in the original text")
    approximate_end: int = Field(..., ge=0, description="Exclusive end offset of the span in the original text")
    original_text: str = Field(..., repr=False, description="The original text the offsets refer to")

    @model_validator(mode="after")
    def validate_offsets(self) -> "AlignedSpan":
        if self.approximate_end < self.start:
            raise ValueError(f"approximate_end ({self.approximate_end}) must not be before start ({self.start})")
        return self

    def from_original(self) -> str:
        return AlignmentUtil.extract_from_original(self.original_text, self.start, self.approximate_end)
