from typing import Any
from pydantic import Field
from sphana_tokenizer.models.encoded_chunk_aligned import EncodedChunkAligned
from sphana_tokenizer.models.tagged_encoded_chunk import TaggedEncodedChunk
from sphana_tokenizer.utils.alignment_util import AlignmentUtil

class TaggedEncodedChunkAligned(EncodedChunkAligned):
    tag: Any = Field(default=None, description="Caller supplied tag extracted from the chunk")

    def from_original(self) -> TaggedEncodedChunk:
        return TaggedEncodedChunk(
            text=AlignmentUtil.extract_from_original(self.original_text, self.start, self.approximate_end),
            vector=self.vector,
            tag=self.tag
        )
