from http import HTTPStatus
from typing import Optional
from sphana_tokenizer.exceptions.error_details import ErrorDetails
from sphana_tokenizer.exceptions.managed_exception import ManagedException

class OutOfRangeException(ManagedException):
    def __init__(self, message: str, diagnostic_details: Optional[dict[str, str]] = None):
        super().__init__(ErrorDetails(
            status_code=HTTPStatus.REQUESTED_RANGE_NOT_SATISFIABLE,
            diagnostic_code="20416",
            diagnostic_details=diagnostic_details or {},
            message=message
        ))
