import logging
import numpy as np
from injector import inject, singleton
from prometheus_client import Counter, Histogram
from time import time
from sphana_tokenizer.configs import TokenizerConfig
from sphana_tokenizer.exceptions import InvalidConfigurationException
from sphana_tokenizer.models import EncodedBatch, TokenizedToken, TokenizedTokenAligned
from sphana_tokenizer.services.text import SpecialCharCollapser, Transliterator, WordSplitter
from sphana_tokenizer.services.tokenizer.subword_tokenizer import SubwordTokenizer
from sphana_tokenizer.services.vocabulary import Vocabulary

TOKENIZER_EXE_COUNTER = Counter("spn_tokenizer_exe_total", "Total number of tokenizer operations executed", ["operation"])
TOKENIZER_EXE_DURATION_HISTOGRAM = Histogram("spn_tokenizer_exe_duration_seconds", "Duration of tokenizer operations in seconds", ["operation"])

@singleton
class WordPieceTokenizer:
    """Turns raw text into encoder inputs.

    Every text goes through transliteration, special character collapsing, word splitting and
    subword tokenization. Encoded rows are framed by the classification and separation tokens.
    """

    @inject
    def __init__(self,
                 config: TokenizerConfig,
                 vocabulary: Vocabulary,
                 transliterator: Transliterator,
                 special_char_collapser: SpecialCharCollapser,
                 word_splitter: WordSplitter,
                 subword_tokenizer: SubwordTokenizer):
        self.__logger = logging.getLogger(self.__class__.__name__)
        self.__vocabulary = vocabulary
        self.__transliterator = transliterator
        self.__special_char_collapser = special_char_collapser
        self.__word_splitter = word_splitter
        self.__subword_tokenizer = subword_tokenizer
        self.__max_tokens: int = config.max_tokens
        self.__approx_char_to_token_ratio: int = config.approx_char_to_token_ratio
        self.__logger.info(f"WordPieceTokenizer initialized with {len(vocabulary)} tokens, max_tokens {self.__max_tokens} and {'cased' if config.cased else 'uncased'} splitting")

    @property
    def vocabulary(self) -> Vocabulary:
        return self.__vocabulary

    @property
    def max_tokens(self) -> int:
        return self.__max_tokens

    @property
    def max_word_length(self) -> int:
        return self.__subword_tokenizer.max_word_length

    @property
    def approx_char_to_token_ratio(self) -> int:
        return self.__approx_char_to_token_ratio

    def set_max_tokens(self, max_tokens: int) -> None:
        if max_tokens <= 0:
            raise InvalidConfigurationException(f"max_tokens must be positive, got {max_tokens}", {"max_tokens": str(max_tokens)})
        self.__max_tokens = max_tokens

    def set_max_word_length(self, max_word_length: int) -> None:
        self.__subword_tokenizer.max_word_length = max_word_length

    def id_to_token(self, token_id: int) -> str:
        return self.__vocabulary.id_to_token(token_id)

    def encode(self, texts: list[str]) -> EncodedBatch:
        start_time: float = time()
        TOKENIZER_EXE_COUNTER.labels(operation="encode").inc()
        try:
            rows: list[list[TokenizedToken]] = self.tokenize(texts)
            width: int = max((len(row) for row in rows), default=0)

            input_ids = np.zeros((len(rows), width), dtype=np.int64)
            segment_ids = np.zeros((len(rows), width), dtype=np.int64)
            attention_mask = np.zeros((len(rows), width), dtype=np.int64)
            for row_index, row in enumerate(rows):
                input_ids[row_index, :len(row)] = [token.vocabulary_index for token in row]
                segment_ids[row_index, :len(row)] = [token.segment_index for token in row]
                attention_mask[row_index, :len(row)] = 1

            return EncodedBatch(input_ids=input_ids, segment_ids=segment_ids, attention_mask=attention_mask)
        finally:
            duration: float = time() - start_time
            TOKENIZER_EXE_DURATION_HISTOGRAM.labels(operation="encode").observe(duration)

    def tokenize(self, texts: list[str]) -> list[list[TokenizedToken]]:
        """Tokenize every text into a framed row with segment ids, without padding."""
        special_tokens = self.__vocabulary.special_tokens
        classification = TokenizedToken(
            token=special_tokens.classification,
            vocabulary_index=self.__vocabulary.classification_id,
            original=special_tokens.classification
        )
        rows: list[list[TokenizedToken]] = []
        for text in texts:
            row: list[TokenizedToken] = ([classification] + self.tokenize_raw(text))[:self.__max_tokens - 1]
            row.append(TokenizedToken(
                token=special_tokens.separation,
                vocabulary_index=self.__vocabulary.separation_id,
                original=special_tokens.separation
            ))
            rows.append(self.__assign_segments(row))
        return rows

    def tokenize_simple(self, text: str) -> list[str]:
        return [token.token for token in self.tokenize_raw(text)]

    def tokenize_raw(self, text: str) -> list[TokenizedToken]:
        start_time: float = time()
        TOKENIZER_EXE_COUNTER.labels(operation="tokenize_raw").inc()
        try:
            transliterated: str = self.__transliterator.transliterate_text(text)
            collapsed: str = self.__special_char_collapser.collapse(transliterated)
            return [
                token
                for word in self.__word_splitter.split(collapsed)
                for token in self.__subword_tokenizer.tokenize(word)
            ]
        finally:
            duration: float = time() - start_time
            TOKENIZER_EXE_DURATION_HISTOGRAM.labels(operation="tokenize_raw").observe(duration)

    def tokenize_raw_aligned(self, text: str) -> list[TokenizedTokenAligned]:
        """Tokenize text keeping, for every token, its character offsets in text."""
        start_time: float = time()
        TOKENIZER_EXE_COUNTER.labels(operation="tokenize_raw_aligned").inc()
        try:
            transliterated, alignment = self.__transliterator.transliterate(text)
            collapsed, alignment = self.__special_char_collapser.collapse_with_alignment(transliterated, alignment)
            return [
                token
                for span in self.__word_splitter.split_aligned(collapsed)
                for token in self.__subword_tokenizer.tokenize_aligned(span, alignment)
            ]
        finally:
            duration: float = time() - start_time
            TOKENIZER_EXE_DURATION_HISTOGRAM.labels(operation="tokenize_raw_aligned").observe(duration)

    def __assign_segments(self, row: list[TokenizedToken]) -> list[TokenizedToken]:
        separation: str = self.__vocabulary.special_tokens.separation
        segment_index: int = 0
        for token in row:
            if token.token == separation:
                segment_index += 1
            token.segment_index = segment_index
        return row
