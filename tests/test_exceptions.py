from http import HTTPStatus
import pytest
from sphana_tokenizer import (
    InvalidConfigurationException,
    MalformedVocabularyException,
    ManagedException,
    OperationCancelledException,
    OutOfRangeException
)


@pytest.mark.parametrize("exception_type,status_code,diagnostic_code", [
    (MalformedVocabularyException, HTTPStatus.UNPROCESSABLE_ENTITY, "20422"),
    (OutOfRangeException, HTTPStatus.REQUESTED_RANGE_NOT_SATISFIABLE, "20416"),
    (InvalidConfigurationException, HTTPStatus.BAD_REQUEST, "20400"),
    (OperationCancelledException, HTTPStatus.REQUEST_TIMEOUT, "20408"),
])
def test_error_details(exception_type, status_code, diagnostic_code):
    error = exception_type("something failed", {"key": "value"})

    assert isinstance(error, ManagedException)
    assert error.status_code == status_code
    assert error.diagnostic_code == diagnostic_code
    assert error.diagnostic_details == {"key": "value"}
    assert str(error) == "something failed"


def test_diagnostic_details_default_to_empty():
    assert InvalidConfigurationException("bad").diagnostic_details == {}
    assert str(OperationCancelledException()) == "Operation was cancelled"


def test_error_details_are_exposed():
    error = OutOfRangeException("id 99 is out of range", {"id": "99"})

    assert error.error_details.message == "id 99 is out of range"
    assert error.error_details.model_dump()["diagnostic_code"] == "20416"
