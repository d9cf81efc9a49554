import io
import logging
import threading
from typing import Optional
from injector import inject, singleton
from sphana_tokenizer.configs import TokenizerConfig
from sphana_tokenizer.utils import TransliterationTable

ASCII_LIMIT = 0x80
SCRATCH_BUFFER_SIZE = 16384

_scratch = threading.local()

@singleton
class Transliterator:
    """Maps text to ASCII while recording, for every output character, the input index it came from."""

    @inject
    def __init__(self, config: TokenizerConfig):
        self.__logger = logging.getLogger(self.__class__.__name__)
        self.__exceptions_lock = threading.Lock()
        self.__exceptions: frozenset[str] = frozenset(config.transliteration_exceptions)
        self.__logger.info(f"Transliterator initialized with {len(self.__exceptions)} exceptions")

    def register_exception(self, c: str) -> None:
        """Keep the given character untransliterated from now on."""
        if len(c) != 1:
            raise ValueError(f"Exactly one character must be registered, got {c!r}")
        with self.__exceptions_lock:
            self.__exceptions = self.__exceptions | {c}

    @property
    def exceptions(self) -> frozenset[str]:
        return self.__exceptions

    def transliterate_text(self, text: str) -> str:
        return self.transliterate(text)[0]

    def transliterate(self, text: str) -> tuple[str, list[int]]:
        return self.transliterate_with_alignment(text, None)

    def transliterate_with_alignment(self, text: str, alignment: Optional[list[int]]) -> tuple[str, list[int]]:
        """Transliterate text whose characters already map to an upstream text.

        Args:
            text: The text to transliterate.
            alignment: For each character of text, its index in the upstream text. None means identity.

        Returns:
            The ASCII text and, for each of its characters, the index in the upstream text.
        """
        if alignment is None:
            alignment = list(range(len(text)))
        elif len(alignment) != len(text):
            raise ValueError(f"alignment length ({len(alignment)}) must match text length ({len(text)})")

        if text.isascii():
            return text, list(alignment)

        if len(text) * TransliterationTable.max_decoded_length() + 1 < SCRATCH_BUFFER_SIZE:
            return self._transliterate_buffered(text, alignment)
        return self._transliterate_builder(text, alignment)

    def _transliterate_buffered(self, text: str, alignment: list[int]) -> tuple[str, list[int]]:
        chars: Optional[list[str]] = getattr(_scratch, "chars", None)
        if chars is None:
            chars = _scratch.chars = [""] * SCRATCH_BUFFER_SIZE
            _scratch.indexes = [0] * SCRATCH_BUFFER_SIZE
        indexes: list[int] = _scratch.indexes

        length: int = 0
        exceptions: frozenset[str] = self.__exceptions
        for index, c in enumerate(text):
            for decoded in self.__decode(c, exceptions):
                chars[length] = decoded
                indexes[length] = alignment[index]
                length += 1
        return "".join(chars[:length]), indexes[:length]

    def _transliterate_builder(self, text: str, alignment: list[int]) -> tuple[str, list[int]]:
        builder = io.StringIO()
        indexes: list[int] = []
        exceptions: frozenset[str] = self.__exceptions
        for index, c in enumerate(text):
            decoded: str = self.__decode(c, exceptions)
            builder.write(decoded)
            indexes.extend([alignment[index]] * len(decoded))
        return builder.getvalue(), indexes

    @staticmethod
    def __decode(c: str, exceptions: frozenset[str]) -> str:
        if ord(c) < ASCII_LIMIT or c in exceptions:
            return c
        return TransliterationTable.lookup(ord(c))
