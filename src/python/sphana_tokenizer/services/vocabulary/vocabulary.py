import logging
from typing import Iterable, Optional
from sphana_tokenizer.exceptions import MalformedVocabularyException, OutOfRangeException
from sphana_tokenizer.models import SpecialTokens

class Vocabulary:
    """Ordered token list of a WordPiece model.

    The position of a token is its id. Instances are immutable once loaded and safe to share
    between threads.
    """

    def __init__(self, tokens: list[str], special_tokens: SpecialTokens):
        self.__logger = logging.getLogger(self.__class__.__name__)
        self.__tokens: tuple[str, ...] = tuple(tokens)
        self.__special_tokens = special_tokens

        # Duplicates resolve to the last occurrence
        self.__token_ids: dict[str, int] = {}
        for index, token in enumerate(self.__tokens):
            self.__token_ids[token] = index

        duplicates: int = len(self.__tokens) - len(self.__token_ids)
        if duplicates > 0:
            self.__logger.warning(f"Vocabulary contains {duplicates} duplicate tokens; the last occurrence of each wins")

    @staticmethod
    def load(token_lines: Iterable[str], special_tokens: Optional[SpecialTokens] = None) -> "Vocabulary":
        special_tokens = special_tokens or SpecialTokens()
        tokens: list[str] = []
        for line in token_lines:
            token: str = line.rstrip("\r\n")
            if not token.strip():
                continue
            tokens.append(token)

        if not tokens:
            raise MalformedVocabularyException("Vocabulary does not contain any token")

        vocabulary = Vocabulary(tokens, special_tokens)
        missing: list[str] = [token for token in special_tokens.reserved() if token not in vocabulary]
        if missing:
            raise MalformedVocabularyException(
                f"Vocabulary is missing reserved tokens: {', '.join(missing)}",
                {"missing_tokens": ",".join(missing)}
            )

        logging.getLogger(Vocabulary.__name__).info(f"Vocabulary loaded with {len(vocabulary)} tokens")
        return vocabulary

    @property
    def special_tokens(self) -> SpecialTokens:
        return self.__special_tokens

    @property
    def classification_id(self) -> int:
        return self.__token_ids[self.__special_tokens.classification]

    @property
    def separation_id(self) -> int:
        return self.__token_ids[self.__special_tokens.separation]

    @property
    def unknown_id(self) -> int:
        return self.__token_ids[self.__special_tokens.unknown]

    @property
    def padding_id(self) -> Optional[int]:
        return self.__token_ids.get(self.__special_tokens.padding)

    def id_to_token(self, token_id: int) -> str:
        if token_id < 0 or token_id >= len(self.__tokens):
            raise OutOfRangeException(
                f"Token id {token_id} is outside the vocabulary range [0, {len(self.__tokens)})",
                {"token_id": str(token_id)}
            )
        return self.__tokens[token_id]

    def token_to_id(self, token: str) -> Optional[int]:
        return self.__token_ids.get(token)

    def __contains__(self, token: object) -> bool:
        return token in self.__token_ids

    def __len__(self) -> int:
        return len(self.__tokens)
