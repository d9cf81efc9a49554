from sphana_tokenizer.exceptions.error_details import ErrorDetails
from sphana_tokenizer.exceptions.managed_exception import ManagedException
from sphana_tokenizer.exceptions.arguments.invalid_configuration_exception import InvalidConfigurationException
from sphana_tokenizer.exceptions.arguments.out_of_range_exception import OutOfRangeException
from sphana_tokenizer.exceptions.operations.operation_cancelled_exception import OperationCancelledException
from sphana_tokenizer.exceptions.vocabulary.malformed_vocabulary_exception import MalformedVocabularyException

__all__ = [
    "ErrorDetails",
    "ManagedException",
    "InvalidConfigurationException",
    "OutOfRangeException",
    "OperationCancelledException",
    "MalformedVocabularyException"
]
