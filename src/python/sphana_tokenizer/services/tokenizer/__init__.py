from .detokenizer import Detokenizer
from .fuzzy_realigner import FuzzyRealigner
from .subword_tokenizer import SubwordTokenizer
from .token_chunker_service import TokenChunkerService
from .wordpiece_tokenizer import WordPieceTokenizer

__all__ = [
    "Detokenizer",
    "FuzzyRealigner",
    "SubwordTokenizer",
    "TokenChunkerService",
    "WordPieceTokenizer"
]
