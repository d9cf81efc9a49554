import logging
from collections import deque
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Optional, Sequence
from injector import inject, singleton
from prometheus_client import Counter, Histogram
from time import time
from sphana_tokenizer.exceptions import InvalidConfigurationException, OperationCancelledException
from sphana_tokenizer.models import AlignedSpan, TokenizedToken, TokenizedTokenAligned
from sphana_tokenizer.services.tokenizer.detokenizer import Detokenizer
from sphana_tokenizer.services.tokenizer.fuzzy_realigner import FuzzyRealigner
from sphana_tokenizer.services.tokenizer.wordpiece_tokenizer import WordPieceTokenizer
from sphana_tokenizer.utils import CancellationToken

CHUNKER_EXE_COUNTER = Counter("spn_chunker_exe_total", "Total number of chunker operations executed", ["operation"])
CHUNKER_EXE_DURATION_HISTOGRAM = Histogram("spn_chunker_exe_duration_seconds", "Duration of chunker operations in seconds", ["operation"])

PROGRESS_REPORT_INTERVAL = 128

@singleton
class TokenChunkerService:

    @inject
    def __init__(self, tokenizer: WordPieceTokenizer, detokenizer: Detokenizer, fuzzy_realigner: FuzzyRealigner):
        self.__logger = logging.getLogger(self.__class__.__name__)
        self.__tokenizer = tokenizer
        self.__detokenizer = detokenizer
        self.__fuzzy_realigner = fuzzy_realigner

    def chunk_tokens(self,
                     text: str,
                     chunk_length: int = 500,
                     chunk_overlap: int = 100,
                     max_chunks: Optional[int] = None,
                     report_progress: Optional[Callable[[float], None]] = None) -> list[str]:
        start_time: float = time()
        CHUNKER_EXE_COUNTER.labels(operation="chunk_tokens").inc()
        try:
            self.__validate(chunk_length, chunk_overlap, max_chunks)
            if report_progress is not None:
                report_progress(0.001)
            tokens: list[TokenizedToken] = self.__tokenizer.tokenize_raw(self.__cut_text(text, chunk_length, max_chunks))
            if report_progress is not None:
                report_progress(0.002)

            chunks: list[str] = self.__merge_token_splits(
                tokens,
                chunk_length,
                chunk_overlap,
                max_chunks,
                lambda window: " ".join(self.__detokenizer.detokenize_tokens(window)),
                report_progress
            )
            self.__logger.debug(f"Chunked {len(text)} characters into {len(chunks)} chunks from {len(tokens)} tokens")
            return chunks
        finally:
            duration: float = time() - start_time
            CHUNKER_EXE_DURATION_HISTOGRAM.labels(operation="chunk_tokens").observe(duration)

    def chunk_tokens_aligned(self,
                             text: str,
                             chunk_length: int = 500,
                             chunk_overlap: int = 100,
                             max_chunks: Optional[int] = None,
                             report_progress: Optional[Callable[[float], None]] = None) -> list[AlignedSpan]:
        start_time: float = time()
        CHUNKER_EXE_COUNTER.labels(operation="chunk_tokens_aligned").inc()
        try:
            self.__validate(chunk_length, chunk_overlap, max_chunks)
            if report_progress is not None:
                report_progress(0.001)
            tokens: list[TokenizedTokenAligned] = self.__tokenizer.tokenize_raw_aligned(self.__cut_text(text, chunk_length, max_chunks))
            if report_progress is not None:
                report_progress(0.002)

            return self.__merge_token_splits(
                tokens,
                chunk_length,
                chunk_overlap,
                max_chunks,
                lambda window: self.__render_aligned(window, text),
                report_progress
            )
        finally:
            duration: float = time() - start_time
            CHUNKER_EXE_DURATION_HISTOGRAM.labels(operation="chunk_tokens_aligned").observe(duration)

    def chunk_tokens_realigned(self,
                               text: str,
                               chunk_length: int = 500,
                               chunk_overlap: int = 100,
                               max_chunks: Optional[int] = None) -> list[str]:
        """Chunk text and replace every lossy chunk with the exact substring of text it covers."""
        chunks: list[str] = self.chunk_tokens(text, chunk_length, chunk_overlap, max_chunks)
        return self.__fuzzy_realigner.realign(text, chunks, overlap_factor=chunk_overlap / chunk_length)

    def chunk_documents(self,
                        texts: Sequence[str],
                        chunk_length: int = 500,
                        chunk_overlap: int = 100,
                        max_chunks: Optional[int] = None,
                        parallel: bool = False,
                        max_workers: Optional[int] = None,
                        cancellation_token: Optional[CancellationToken] = None,
                        keep_results_on_cancellation: bool = False) -> list[list[str]]:
        """Chunk many documents, optionally on a thread pool.

        Cancellation is checked between documents. With keep_results_on_cancellation the chunks
        of the documents completed so far are returned instead of raising.
        """
        start_time: float = time()
        CHUNKER_EXE_COUNTER.labels(operation="chunk_documents").inc()
        try:
            self.__validate(chunk_length, chunk_overlap, max_chunks)
            results: list[list[str]] = []
            try:
                if not parallel:
                    for text in texts:
                        self.__check_cancellation(cancellation_token)
                        results.append(self.chunk_tokens(text, chunk_length, chunk_overlap, max_chunks))
                    return results

                with ThreadPoolExecutor(max_workers=max_workers) as executor:
                    futures: list[Future] = [
                        executor.submit(self.chunk_tokens, text, chunk_length, chunk_overlap, max_chunks)
                        for text in texts
                    ]
                    try:
                        for future in futures:
                            self.__check_cancellation(cancellation_token)
                            results.append(future.result())
                    finally:
                        for future in futures:
                            future.cancel()
                return results
            except OperationCancelledException:
                if keep_results_on_cancellation:
                    self.__logger.info(f"Chunking cancelled after {len(results)} of {len(texts)} documents")
                    return results
                raise
        finally:
            duration: float = time() - start_time
            CHUNKER_EXE_DURATION_HISTOGRAM.labels(operation="chunk_documents").observe(duration)

    def chunk_string(self,
                     text: str,
                     separator: str = " ",
                     chunk_length: int = 500,
                     chunk_overlap: int = 100,
                     max_chunks: Optional[int] = None) -> list[str]:
        """Chunk text by character budget over its whitespace separated words."""
        start_time: float = time()
        CHUNKER_EXE_COUNTER.labels(operation="chunk_string").inc()
        try:
            self.__validate(chunk_length, chunk_overlap, max_chunks)
            words: list[str] = [word for word in text.replace("\r", " ").replace("\n", " ").split(" ") if word]

            chunks: list[str] = []
            window: deque[str] = deque()
            total: int = 0
            for word in words:
                if total + len(word) + (len(separator) if window else 0) > chunk_length and window:
                    chunk: str = separator.join(window)
                    if chunk.strip():
                        chunks.append(chunk)

                    while window and (total > chunk_overlap or total + len(word) + len(separator) > chunk_length):
                        total -= len(window[0]) + (len(separator) if len(window) > 1 else 0)
                        window.popleft()

                total += len(word) + (len(separator) if window else 0)
                window.append(word)

                if max_chunks is not None and len(chunks) > max_chunks:
                    return chunks

            final_chunk: str = separator.join(window)
            if final_chunk.strip():
                chunks.append(final_chunk)
            return chunks
        finally:
            duration: float = time() - start_time
            CHUNKER_EXE_DURATION_HISTOGRAM.labels(operation="chunk_string").observe(duration)

    def __merge_token_splits(self,
                             tokens: Sequence[TokenizedToken],
                             chunk_length: int,
                             chunk_overlap: int,
                             max_chunks: Optional[int],
                             render: Callable[[list], Any],
                             report_progress: Optional[Callable[[float], None]]) -> list:
        chunks: list = []
        window: deque = deque()
        for index, token in enumerate(tokens):
            if len(window) + 1 > chunk_length:
                if any(t.original.strip() for t in window):
                    chunks.append(render(list(window)))

                while len(window) > chunk_overlap or (len(window) + 1 > chunk_length and window):
                    window.popleft()

            window.append(token)

            if report_progress is not None and index % PROGRESS_REPORT_INTERVAL == 0:
                report_progress(index / len(tokens))

            # Allows one chunk past max_chunks, as existing indexes were built that way
            if max_chunks is not None and len(chunks) > max_chunks:
                return chunks

        if any(t.original.strip() for t in window):
            chunks.append(render(list(window)))
        return chunks

    def __render_aligned(self, window: list[TokenizedTokenAligned], original_text: str) -> AlignedSpan:
        words: list[AlignedSpan] = self.__detokenizer.detokenize_aligned(window, original_text)
        return AlignedSpan(
            text=" ".join(word.text for word in words),
            start=window[0].start,
            last_start=window[-1].start,
            approximate_end=max(window[-1].approximate_end, window[0].start),
            original_text=original_text
        )

    def __cut_text(self, text: str, chunk_length: int, max_chunks: Optional[int]) -> str:
        if max_chunks is None:
            return text
        return text[:chunk_length * max_chunks * self.__tokenizer.approx_char_to_token_ratio]

    @staticmethod
    def __check_cancellation(cancellation_token: Optional[CancellationToken]) -> None:
        if cancellation_token is not None:
            cancellation_token.throw_if_cancellation_requested()

    @staticmethod
    def __validate(chunk_length: int, chunk_overlap: int, max_chunks: Optional[int]) -> None:
        if chunk_length <= 0:
            raise InvalidConfigurationException(f"chunk_length must be positive, got {chunk_length}", {"chunk_length": str(chunk_length)})
        if chunk_overlap < 0:
            raise InvalidConfigurationException(f"chunk_overlap must be non-negative, got {chunk_overlap}", {"chunk_overlap": str(chunk_overlap)})
        if chunk_overlap >= chunk_length:
            raise InvalidConfigurationException(f"chunk_overlap ({chunk_overlap}) must be less than chunk_length ({chunk_length})", {"chunk_overlap": str(chunk_overlap), "chunk_length": str(chunk_length)})
        if max_chunks is not None and max_chunks <= 0:
            raise InvalidConfigurationException(f"max_chunks must be positive, got {max_chunks}", {"max_chunks": str(max_chunks)})
