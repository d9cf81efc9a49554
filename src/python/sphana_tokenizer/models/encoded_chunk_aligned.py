from pydantic import Field
from sphana_tokenizer.models.encoded_chunk import EncodedChunk
from sphana_tokenizer.utils.alignment_util import AlignmentUtil

class EncodedChunkAligned(EncodedChunk):
    start: int = Field(..., ge=0, description="Offset of the chunk start in the original text")
    last_start: int = Field(..., ge=0, description="Offset of the start of the last word of the chunk in the original text")
    approximate_end: int = Field(..., ge=0, description="Exclusive end offset of the chunk in the original text")
    original_text: str = Field(..., repr=False, description="The original text the offsets refer to")

    def from_original(self) -> EncodedChunk:
        return EncodedChunk(
            text=AlignmentUtil.extract_from_original(self.original_text, self.start, self.approximate_end),
            vector=self.vector
        )
