import logging
import threading
from typing import Optional
import regex

logger = logging.getLogger(__name__)

BMP_SIZE = 0x10000
SURROGATES = range(0xD800, 0xE000)

CURRENCY_OR_SYMBOL_PATTERN = regex.compile(r"[\p{Sc}\p{So}]")
WHITESPACES_AND_BRACKETS = " \n\r\t\v\f()[]{}"
HYPHENS = "-–—~"
QUOTES = "'\"”“`‘´’‚„»«「」『』（）〔〕【】《》〈〉"
SENTENCE_PUNCTUATION = "…:;!?."
PUNCTUATION = "…,:;!?¿¡()[]{}<>_#*&"

class CharacterClasses:
    __special_chars: Optional[frozenset[str]] = None
    __lock = threading.Lock()

    @staticmethod
    def is_special_char(c: str) -> bool:
        return c in CharacterClasses.special_chars()

    @staticmethod
    def special_chars() -> frozenset[str]:
        """Characters whose immediate repetitions are collapsed.

        Built once on first use: whitespace and brackets, currency and other symbols,
        hyphens, quote variants and punctuation over the whole basic multilingual plane.
        """
        special_chars = CharacterClasses.__special_chars
        if special_chars is not None:
            return special_chars

        with CharacterClasses.__lock:
            if CharacterClasses.__special_chars is None:
                CharacterClasses.__special_chars = CharacterClasses.__build()
            return CharacterClasses.__special_chars

    @staticmethod
    def __build() -> frozenset[str]:
        chars: set[str] = set(WHITESPACES_AND_BRACKETS + HYPHENS + QUOTES + SENTENCE_PUNCTUATION + PUNCTUATION)
        for code_point in range(BMP_SIZE):
            if code_point in SURROGATES:
                continue
            c: str = chr(code_point)
            if c.isspace() or CURRENCY_OR_SYMBOL_PATTERN.match(c):
                chars.add(c)
        logger.debug(f"Special character set built with {len(chars)} characters")
        return frozenset(chars)
