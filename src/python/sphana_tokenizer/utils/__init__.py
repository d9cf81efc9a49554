from .alignment_util import AlignmentUtil
from .cancellation_token import CancellationToken
from .character_classes import CharacterClasses
from .logging_util import LoggingUtil
from .transliteration_table import TransliterationTable
from .vocabulary_reader import VocabularyReader

__all__ = [
    "AlignmentUtil",
    "CancellationToken",
    "CharacterClasses",
    "LoggingUtil",
    "TransliterationTable",
    "VocabularyReader"
]
