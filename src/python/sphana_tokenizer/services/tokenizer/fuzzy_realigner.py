import logging
from functools import lru_cache
import numpy as np
from injector import inject, singleton
from prometheus_client import Counter, Histogram
from time import time
from sphana_tokenizer.configs import TokenizerConfig
from sphana_tokenizer.services.text import Transliterator
from sphana_tokenizer.utils import CharacterClasses

REALIGNER_EXE_COUNTER = Counter("spn_realigner_exe_total", "Total number of realigner operations executed", ["operation"])
REALIGNER_EXE_DURATION_HISTOGRAM = Histogram("spn_realigner_exe_duration_seconds", "Duration of realigner operations in seconds", ["operation"])

FOLD_CACHE_SIZE = 65536

@singleton
class FuzzyRealigner:
    """Recovers exact substrings of an original text from lossy chunk strings.

    Each chunk is located with a semi-global edit distance search inside a window that follows
    the previous match. Characters compare equal when identical or when their case-folded
    transliterations are equal.
    """

    @inject
    def __init__(self, config: TokenizerConfig, transliterator: Transliterator):
        self.__logger = logging.getLogger(self.__class__.__name__)
        self.__transliterator = transliterator
        self.__slack_ratio: float = config.realign_slack_ratio
        self.__min_slack: int = config.realign_min_slack
        self.__fold = lru_cache(maxsize=FOLD_CACHE_SIZE)(self.__fold_char)

    def realign(self, original_text: str, lossy_chunks: list[str], overlap_factor: float = 0.0) -> list[str]:
        """Map every lossy chunk to the substring of original_text it was produced from.

        Args:
            original_text: The text the chunks were derived from.
            lossy_chunks: Chunk strings in document order, possibly transliterated or re-spaced.
            overlap_factor: Fraction of each chunk shared with the next one.

        Returns:
            One exact substring of original_text per chunk.
        """
        start_time: float = time()
        REALIGNER_EXE_COUNTER.labels(operation="realign").inc()
        try:
            if not 0.0 <= overlap_factor < 1.0:
                raise ValueError(f"overlap_factor must be in [0, 1), got {overlap_factor}")

            keys: dict[str, int] = {}
            original_keys = np.array([self.__key(c, keys) for c in original_text], dtype=np.int64)
            # skip_costs[i] is the number of kept characters in original_text[:i]
            skip_costs = np.concatenate(([0], np.cumsum(self.__skip_costs(original_text))))

            realigned: list[str] = []
            window_start: int = 0
            anchored: bool = True
            for chunk in lossy_chunks:
                if not chunk:
                    realigned.append("")
                    continue

                slack: int = max(self.__min_slack, int(len(chunk) * self.__slack_ratio))
                window_end: int = int(np.searchsorted(skip_costs, skip_costs[window_start] + len(chunk) + slack, side="right")) - 1
                chunk_keys = np.array([self.__key(c, keys) for c in chunk], dtype=np.int64)
                match_start, match_end = self.__align(
                    chunk_keys,
                    original_keys[window_start:window_end],
                    skip_costs[window_start:window_end + 1] - skip_costs[window_start],
                    anchored
                )

                match_start += window_start
                match_end += window_start
                realigned.append(original_text[match_start:match_end])
                self.__logger.debug(f"Chunk of {len(chunk)} characters realigned to [{match_start}, {match_end})")

                window_start = min(len(original_text), match_start + int((1.0 - overlap_factor) * (match_end - match_start)))
                anchored = False
            return realigned
        finally:
            duration: float = time() - start_time
            REALIGNER_EXE_DURATION_HISTOGRAM.labels(operation="realign").observe(duration)

    def __key(self, c: str, keys: dict[str, int]) -> int:
        # Characters without a fold only match themselves
        fold: str = self.__fold(c) or "\0" + c
        key = keys.get(fold)
        if key is None:
            key = keys[fold] = len(keys)
        return key

    def __fold_char(self, c: str) -> str:
        return self.__transliterator.transliterate_text(c.casefold()).lower()

    def __skip_costs(self, original_text: str) -> np.ndarray:
        """Cost of leaving each original character unmatched.

        Characters the tokenizer drops are free: those transliterated to nothing, repeated
        special characters removed by the collapser, and whitespace following whitespace.
        """
        costs = np.ones(len(original_text), dtype=np.int64)
        previous: str = ""
        for index, c in enumerate(original_text):
            if not self.__fold(c) or (c == previous and CharacterClasses.is_special_char(c)) or (c.isspace() and previous.isspace()):
                costs[index] = 0
            previous = c
        return costs

    @staticmethod
    def __align(chunk: np.ndarray, window: np.ndarray, skip_costs: np.ndarray, anchored: bool) -> tuple[int, int]:
        """Find the window range with the lowest edit distance to the chunk.

        Rows walk the chunk, columns the window. Each cell keeps its cost and the window column
        where its path started. skip_costs[j] is the cost of skipping the first j window
        characters. Anchored searches pay for every kept character before the match start;
        otherwise any column is a free start. The insertion pass inside a row is a running
        minimum of cost - skip_costs.
        """
        columns = np.arange(window.size + 1, dtype=np.int64)
        starts = columns.copy()
        if anchored:
            costs = skip_costs.copy()
        else:
            costs = np.zeros(window.size + 1, dtype=np.int64)

        for row, key in enumerate(chunk, start=1):
            substitution = np.empty_like(costs)
            substitution[0] = np.iinfo(np.int64).max // 2
            substitution[1:] = costs[:-1] + (window != key)
            deletion = costs + 1

            candidate_costs = np.minimum(substitution, deletion)
            candidate_starts = np.empty_like(starts)
            candidate_starts[0] = starts[0]
            candidate_starts[1:] = np.where(substitution[1:] <= deletion[1:], starts[:-1], starts[1:])

            shifted = candidate_costs - skip_costs
            running = np.minimum.accumulate(shifted)
            source = np.maximum.accumulate(np.where(shifted == running, columns, 0))
            costs = running + skip_costs
            starts = candidate_starts[source]

        lengths = columns - starts
        best = costs == costs.min()
        distance_to_chunk = np.where(best, np.abs(lengths - chunk.size), np.iinfo(np.int64).max)
        end = int(np.argmin(distance_to_chunk))
        return int(starts[end]), end
