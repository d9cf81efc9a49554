from pydantic import BaseModel, Field

class SpecialTokens(BaseModel):
    classification: str = Field(default="[CLS]", description="Token prepended to every encoded sequence")
    separation: str = Field(default="[SEP]", description="Token appended to every encoded sequence")
    unknown: str = Field(default="[UNK]", description="Token emitted for text the vocabulary cannot represent")
    padding: str = Field(default="[PAD]", description="Padding token, optional in the vocabulary")

    def reserved(self) -> list[str]:
        return [self.classification, self.separation, self.unknown]
