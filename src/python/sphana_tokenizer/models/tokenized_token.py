from pydantic import BaseModel, Field

class TokenizedToken(BaseModel):
    token: str = Field(..., description="The vocabulary token (continuations carry the ## prefix)")
    vocabulary_index: int = Field(..., description="Id of the token in the vocabulary")
    original: str = Field(..., description="The text the token was produced from, without the ## prefix")
    segment_index: int = Field(default=0, description="Segment id of the token within its sequence")
