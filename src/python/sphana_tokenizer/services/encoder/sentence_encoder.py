from abc import ABC, abstractmethod
from typing import Optional
import numpy as np
from sphana_tokenizer.models import EncodedBatch
from sphana_tokenizer.services.tokenizer import WordPieceTokenizer
from sphana_tokenizer.utils import CancellationToken

class SentenceEncoder(ABC):
    """Bridge to an embedding model that consumes encoded batches.

    Implementations run the model and any pooling; this class only prepares the batch.
    """

    def __init__(self, tokenizer: WordPieceTokenizer, max_chunk_length: int):
        self.__tokenizer = tokenizer
        self.__max_chunk_length = max_chunk_length

    @property
    def tokenizer(self) -> WordPieceTokenizer:
        return self.__tokenizer

    @property
    def max_chunk_length(self) -> int:
        return self.__max_chunk_length

    @abstractmethod
    def encode_batch(self, batch: EncodedBatch) -> np.ndarray:
        """Returns one vector per batch row, shape [batch_size, dimensions]."""
        pass

    def encode(self, sentences: list[str], cancellation_token: Optional[CancellationToken] = None) -> list[list[float]]:
        if cancellation_token is not None:
            cancellation_token.throw_if_cancellation_requested()
        if not sentences:
            return []
        vectors: np.ndarray = self.encode_batch(self.__tokenizer.encode(sentences))
        return [vector.tolist() for vector in vectors]
