from http import HTTPStatus
from sphana_tokenizer.exceptions.error_details import ErrorDetails

class ManagedException(Exception):
    """Base class of every error raised by the tokenizer; carries its ErrorDetails."""

    def __init__(self, error: ErrorDetails):
        self.__error = error
        super().__init__(error.message)

    @property
    def error_details(self) -> ErrorDetails:
        return self.__error

    @property
    def status_code(self) -> HTTPStatus:
        return self.__error.status_code

    @property
    def diagnostic_code(self) -> str:
        return self.__error.diagnostic_code

    @property
    def diagnostic_details(self) -> dict[str, str]:
        return self.__error.diagnostic_details
