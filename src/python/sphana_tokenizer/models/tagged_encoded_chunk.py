from typing import Any
from pydantic import Field
from sphana_tokenizer.models.encoded_chunk import EncodedChunk

class TaggedEncodedChunk(EncodedChunk):
    tag: Any = Field(default=None, description="Caller supplied tag extracted from the chunk")
