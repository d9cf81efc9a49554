from sphana_tokenizer.configs import TokenizerConfig, load_config
from sphana_tokenizer.exceptions import (
    ManagedException,
    InvalidConfigurationException,
    MalformedVocabularyException,
    OperationCancelledException,
    OutOfRangeException
)
from sphana_tokenizer.services.encoder import ChunkEncoderService, SentenceEncoder
from sphana_tokenizer.services.text import SpecialCharCollapser, Transliterator, WordSplitter
from sphana_tokenizer.services.tokenizer import Detokenizer, FuzzyRealigner, SubwordTokenizer, TokenChunkerService, WordPieceTokenizer
from sphana_tokenizer.services.vocabulary import Vocabulary
from sphana_tokenizer.tokenizer_module import TokenizerModule
from sphana_tokenizer.utils import CancellationToken, LoggingUtil

__all__ = [
    "TokenizerConfig",
    "load_config",
    "ManagedException",
    "InvalidConfigurationException",
    "MalformedVocabularyException",
    "OperationCancelledException",
    "OutOfRangeException",
    "ChunkEncoderService",
    "SentenceEncoder",
    "SpecialCharCollapser",
    "Transliterator",
    "WordSplitter",
    "Detokenizer",
    "FuzzyRealigner",
    "SubwordTokenizer",
    "TokenChunkerService",
    "WordPieceTokenizer",
    "Vocabulary",
    "TokenizerModule",
    "CancellationToken",
    "LoggingUtil"
]
