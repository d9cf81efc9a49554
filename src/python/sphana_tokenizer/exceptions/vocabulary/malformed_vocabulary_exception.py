from http import HTTPStatus
from typing import Optional
from sphana_tokenizer.exceptions.error_details import ErrorDetails
from sphana_tokenizer.exceptions.managed_exception import ManagedException

class MalformedVocabularyException(ManagedException):
    def __init__(self, message: str, diagnostic_details: Optional[dict[str, str]] = None):
        super().__init__(ErrorDetails(
            status_code=HTTPStatus.UNPROCESSABLE_ENTITY,
            diagnostic_code="20422",
            diagnostic_details=diagnostic_details or {},
            message=message
        ))
