from injector import inject, singleton
from sphana_tokenizer.configs import TokenizerConfig
from sphana_tokenizer.models import AlignedSpan

@singleton
class WordSplitter:
    """Splits text into words and one-character punctuation pieces.

    Text is first cut on the configured literal separators (earliest occurrence wins, the
    first listed separator wins ties), then every punctuation delimiter becomes its own piece.
    """

    @inject
    def __init__(self, config: TokenizerConfig):
        self.__space_delimiters: list[str] = list(config.space_delimiters)
        self.__punctuation_delimiters: frozenset[str] = frozenset(config.punctuation_delimiters)
        self.__cased: bool = config.cased

    def split(self, text: str) -> list[str]:
        return [piece for _, _, piece in self.__split_with_offsets(text)]

    def split_aligned(self, text: str) -> list[AlignedSpan]:
        """Split text keeping the offset of every piece.

        Offsets refer to text itself; callers map them through their own alignment.
        """
        return [
            AlignedSpan(
                text=piece,
                start=offset,
                last_start=offset,
                approximate_end=offset + length,
                original_text=text
            )
            for offset, length, piece in self.__split_with_offsets(text)
        ]

    def __split_with_offsets(self, text: str) -> list[tuple[int, int, str]]:
        pieces: list[tuple[int, int, str]] = []
        for offset, segment in self.__split_on_spaces(text):
            for piece_offset, piece in self.__split_and_keep(segment):
                pieces.append((offset + piece_offset, len(piece), piece if self.__cased else piece.lower()))
        return pieces

    def __split_on_spaces(self, text: str) -> list[tuple[int, str]]:
        segments: list[tuple[int, str]] = []
        start: int = 0
        while True:
            next_index: int = -1
            next_length: int = 0
            for delimiter in self.__space_delimiters:
                index: int = text.find(delimiter, start)
                if index >= 0 and (next_index < 0 or index < next_index):
                    next_index = index
                    next_length = len(delimiter)

            if next_index < 0:
                segments.append((start, text[start:]))
                return segments

            segments.append((start, text[start:next_index]))
            start = next_index + next_length

    def __split_and_keep(self, segment: str) -> list[tuple[int, str]]:
        pieces: list[tuple[int, str]] = []
        start: int = 0
        for index, c in enumerate(segment):
            if c not in self.__punctuation_delimiters:
                continue
            if index > start:
                pieces.append((start, segment[start:index]))
            pieces.append((index, c))
            start = index + 1
        if start < len(segment):
            pieces.append((start, segment[start:]))
        return pieces
