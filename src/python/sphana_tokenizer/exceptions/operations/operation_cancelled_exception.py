from http import HTTPStatus
from typing import Optional
from sphana_tokenizer.exceptions.error_details import ErrorDetails
from sphana_tokenizer.exceptions.managed_exception import ManagedException

class OperationCancelledException(ManagedException):
    def __init__(self, message: str = "Operation was cancelled", diagnostic_details: Optional[dict[str, str]] = None):
        super().__init__(ErrorDetails(
            status_code=HTTPStatus.REQUEST_TIMEOUT,
            diagnostic_code="20408",
            diagnostic_details=diagnostic_details or {},
            message=message
        ))
