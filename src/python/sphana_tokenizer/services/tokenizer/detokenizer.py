from typing import Optional
from injector import singleton
from sphana_tokenizer.models import AlignedSpan, TokenizedToken, TokenizedTokenAligned
from sphana_tokenizer.services.tokenizer.subword_tokenizer import CONTINUATION_PREFIX

@singleton
class Detokenizer:
    """Merges subword tokens back into words.

    Tokens are scanned from the end: continuation tokens accumulate in front of a buffer and the
    next head token closes the word. A run of continuation tokens without a head (a window that
    starts inside a word) is still emitted as a word.
    """

    def detokenize(self, tokens: list[str]) -> list[str]:
        words: list[str] = []
        buffer: str = ""
        pending: bool = False
        for token in reversed(tokens):
            if token.startswith(CONTINUATION_PREFIX):
                buffer = token.replace(CONTINUATION_PREFIX, "") + buffer
                pending = True
            else:
                words.append(token + buffer)
                buffer = ""
                pending = False
        if pending:
            words.append(buffer)
        words.reverse()
        return words

    def detokenize_tokens(self, tokens: list[TokenizedToken]) -> list[str]:
        words: list[str] = []
        buffer: str = ""
        pending: bool = False
        for token in reversed(tokens):
            if token.token.startswith(CONTINUATION_PREFIX):
                buffer = token.token.replace(CONTINUATION_PREFIX, "") + buffer
                pending = True
            else:
                words.append(token.original + buffer)
                buffer = ""
                pending = False
        if pending:
            words.append(buffer)
        words.reverse()
        return words

    def detokenize_aligned(self, tokens: list[TokenizedTokenAligned], original_text: str) -> list[AlignedSpan]:
        words: list[AlignedSpan] = []
        buffer: str = ""
        last: Optional[TokenizedTokenAligned] = None
        first: Optional[TokenizedTokenAligned] = None
        for token in reversed(tokens):
            if last is None:
                last = token
            first = token
            if token.token.startswith(CONTINUATION_PREFIX):
                buffer = token.token.replace(CONTINUATION_PREFIX, "") + buffer
                continue

            words.append(self.__aligned_word(token.original + buffer, token, last, original_text))
            buffer = ""
            last = None

        if last is not None and first is not None:
            words.append(self.__aligned_word(buffer, first, last, original_text))
        words.reverse()
        return words

    @staticmethod
    def __aligned_word(text: str, first: TokenizedTokenAligned, last: TokenizedTokenAligned, original_text: str) -> AlignedSpan:
        return AlignedSpan(
            text=text,
            start=first.start,
            last_start=last.start,
            approximate_end=max(last.approximate_end, first.start),
            original_text=original_text
        )
