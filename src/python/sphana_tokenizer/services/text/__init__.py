from .special_char_collapser import SpecialCharCollapser
from .transliterator import Transliterator
from .word_splitter import WordSplitter

__all__ = [
    "SpecialCharCollapser",
    "Transliterator",
    "WordSplitter"
]
