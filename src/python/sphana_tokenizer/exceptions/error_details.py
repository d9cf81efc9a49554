from http import HTTPStatus
from pydantic import BaseModel, Field

class ErrorDetails(BaseModel):
    status_code: HTTPStatus = Field(..., description="HTTP status a service surface should map the error to")
    diagnostic_code: str = Field(..., description="Stable tokenizer error code, e.g. 20422 for a malformed vocabulary")
    diagnostic_details: dict[str, str] = Field(default_factory=dict, description="Offending values keyed by argument name")
    message: str = Field(..., description="Human readable error message")
