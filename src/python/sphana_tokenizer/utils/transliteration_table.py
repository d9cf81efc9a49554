import logging
import threading
from typing import Optional
from unidecode import unidecode

logger = logging.getLogger(__name__)

PAGE_COUNT = 256
PAGE_SIZE = 256
ASCII_LIMIT = 0x80
SURROGATES = range(0xD800, 0xE000)

Page = tuple[str, ...]

class TransliterationTable:
    """Per-character ASCII replacements for the basic multilingual plane.

    The table is split into 256 pages keyed by the high byte of the code point, each holding
    the 256 replacement strings of that page. A page without any replacement is stored as None.
    Code points beyond the table (astral plane) have no replacement.
    """
    __pages: Optional[tuple[Optional[Page], ...]] = None
    __max_decoded_length: int = 0
    __lock = threading.Lock()

    @staticmethod
    def lookup(code_point: int) -> str:
        """Returns the replacement of a non-ASCII code point, or an empty string when it is dropped."""
        page_index: int = code_point >> 8
        if page_index >= PAGE_COUNT:
            return ""
        page: Optional[Page] = TransliterationTable.pages()[page_index]
        if page is None:
            return ""
        return page[code_point & 0xFF]

    @staticmethod
    def max_decoded_length() -> int:
        TransliterationTable.pages()
        return TransliterationTable.__max_decoded_length

    @staticmethod
    def pages() -> tuple[Optional[Page], ...]:
        pages = TransliterationTable.__pages
        if pages is not None:
            return pages

        with TransliterationTable.__lock:
            if TransliterationTable.__pages is None:
                TransliterationTable.__pages = TransliterationTable.__build()
            return TransliterationTable.__pages

    @staticmethod
    def __build() -> tuple[Optional[Page], ...]:
        pages: list[Optional[Page]] = []
        max_decoded_length: int = 1
        for page_index in range(PAGE_COUNT):
            entries: list[str] = []
            for low in range(PAGE_SIZE):
                code_point: int = (page_index << 8) | low
                if code_point < ASCII_LIMIT:
                    entries.append(chr(code_point))
                elif code_point in SURROGATES:
                    entries.append("")
                else:
                    entries.append(unidecode(chr(code_point)))
            if any(entries):
                pages.append(tuple(entries))
                max_decoded_length = max(max_decoded_length, max(len(entry) for entry in entries))
            else:
                pages.append(None)

        TransliterationTable.__max_decoded_length = max_decoded_length
        logger.debug(f"Transliteration table built with {sum(page is not None for page in pages)} pages and max decoded length {max_decoded_length}")
        return tuple(pages)
