from typing import Any
from pydantic import BaseModel, Field

class TaggedChunk(BaseModel):
    text: str = Field(..., description="The chunk text with tags stripped")
    tag: Any = Field(default=None, description="Caller supplied tag extracted from the chunk")
