from pydantic import BaseModel, Field

class EncodedChunk(BaseModel):
    text: str = Field(..., description="The chunk text")
    vector: list[float] = Field(..., description="The encoded vector of the chunk")
