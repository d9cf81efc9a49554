from typing import NamedTuple
from injector import inject, singleton
from sphana_tokenizer.configs import TokenizerConfig
from sphana_tokenizer.exceptions import InvalidConfigurationException
from sphana_tokenizer.models import AlignedSpan, TokenizedToken, TokenizedTokenAligned
from sphana_tokenizer.services.vocabulary import Vocabulary

CONTINUATION_PREFIX = "##"

class SubwordPiece(NamedTuple):
    token: str
    vocabulary_index: int
    original: str
    offset: int
    length: int

@singleton
class SubwordTokenizer:
    """Greedy longest-prefix WordPiece tokenization of single words."""

    @inject
    def __init__(self, vocabulary: Vocabulary, config: TokenizerConfig):
        self.__vocabulary = vocabulary
        self.__max_word_length: int = config.max_word_length

    @property
    def max_word_length(self) -> int:
        return self.__max_word_length

    @max_word_length.setter
    def max_word_length(self, value: int) -> None:
        if value <= 0:
            raise InvalidConfigurationException(f"max_word_length must be positive, got {value}", {"max_word_length": str(value)})
        self.__max_word_length = value

    def tokenize(self, word: str) -> list[TokenizedToken]:
        return [
            TokenizedToken(token=piece.token, vocabulary_index=piece.vocabulary_index, original=piece.original)
            for piece in self.tokenize_pieces(word)
        ]

    def tokenize_aligned(self, span: AlignedSpan, alignment: list[int]) -> list[TokenizedTokenAligned]:
        """Tokenize a word located at span.start of a text mapped to the original by alignment."""
        span_length: int = max(span.approximate_end - span.start, 1)
        tokens: list[TokenizedTokenAligned] = []
        for piece in self.tokenize_pieces(span.text):
            first: int = span.start + min(piece.offset, span_length - 1)
            last: int = span.start + min(piece.offset + max(piece.length, 1), span_length) - 1
            first = min(first, len(alignment) - 1)
            last = min(max(last, first), len(alignment) - 1)
            tokens.append(TokenizedTokenAligned(
                token=piece.token,
                vocabulary_index=piece.vocabulary_index,
                original=piece.original,
                start=alignment[first],
                approximate_end=alignment[last] + 1
            ))
        return tokens

    def tokenize_pieces(self, word: str) -> list[SubwordPiece]:
        """Split a word into vocabulary pieces with their character offsets inside the word.

        Words longer than max_word_length produce nothing. A prefix that cannot be matched turns
        the rest of the word into a single unknown token.
        """
        if len(word) > self.__max_word_length:
            return []

        word_id = self.__vocabulary.token_to_id(word)
        if word_id is not None:
            return [SubwordPiece(word, word_id, word, 0, len(word))]

        pieces: list[SubwordPiece] = []
        remaining: str = word
        consumed: int = 0
        while remaining and remaining != CONTINUATION_PREFIX:
            stop_limit: int = len(CONTINUATION_PREFIX) if remaining.startswith(CONTINUATION_PREFIX) else 1
            prefix: str = ""
            for length in range(len(remaining), stop_limit - 1, -1):
                if remaining[:length] in self.__vocabulary:
                    prefix = remaining[:length]
                    break

            if not prefix:
                pieces.append(self.__unknown(remaining, consumed, len(word) - consumed))
                return pieces

            remaining_after: str = CONTINUATION_PREFIX + remaining[len(prefix):]
            if remaining_after == remaining:
                # A bare "##" entry matches without consuming anything
                pieces.append(self.__unknown(remaining, consumed, len(word) - consumed))
                return pieces

            marker_length: int = len(CONTINUATION_PREFIX) if consumed > 0 else 0
            real_length: int = len(prefix) - marker_length
            pieces.append(SubwordPiece(prefix, self.__vocabulary.token_to_id(prefix), self.__trim_continuation(prefix), consumed, real_length))
            consumed += real_length
            remaining = remaining_after

        if not pieces and word.strip():
            pieces.append(self.__unknown(word, 0, len(word)))
        return pieces

    def __unknown(self, remaining: str, offset: int, length: int) -> SubwordPiece:
        return SubwordPiece(
            self.__vocabulary.special_tokens.unknown,
            self.__vocabulary.unknown_id,
            self.__trim_continuation(remaining),
            offset,
            length
        )

    @staticmethod
    def __trim_continuation(text: str) -> str:
        return text[len(CONTINUATION_PREFIX):] if text.startswith(CONTINUATION_PREFIX) else text
