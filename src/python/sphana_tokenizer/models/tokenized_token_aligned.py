from pydantic import Field, model_validator
from sphana_tokenizer.models.tokenized_token import TokenizedToken

class TokenizedTokenAligned(TokenizedToken):
    start: int = Field(..., ge=0, description="Offset of the first source character in the original text")
    approximate_end: int = Field(..., ge=0, description="Exclusive end offset in the original text")

    @model_validator(mode="after")
    def validate_offsets(self) -> "TokenizedTokenAligned":
        if self.approximate_end < self.start:
            raise ValueError(f"approximate_end ({self.approximate_end}) must not be before start ({self.start})")
        return self
