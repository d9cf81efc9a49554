import logging
from typing import Callable, Optional
from injector import inject, singleton
from prometheus_client import Counter, Histogram
from time import time
from sphana_tokenizer.exceptions import OperationCancelledException
from sphana_tokenizer.models import AlignedSpan, EncodedChunk, EncodedChunkAligned, TaggedChunk, TaggedEncodedChunk, TaggedEncodedChunkAligned
from sphana_tokenizer.services.encoder.sentence_encoder import SentenceEncoder
from sphana_tokenizer.services.tokenizer import TokenChunkerService
from sphana_tokenizer.utils import CancellationToken

CHUNK_ENCODER_EXE_COUNTER = Counter("spn_chunk_encoder_exe_total", "Total number of chunk encoder operations executed", ["operation"])
CHUNK_ENCODER_EXE_DURATION_HISTOGRAM = Histogram("spn_chunk_encoder_exe_duration_seconds", "Duration of chunk encoder operations in seconds", ["operation"])

PROGRESS_REPORT_INTERVAL = 128
DEFAULT_OVERLAP_DIVISOR = 5

@singleton
class ChunkEncoderService:
    """Chunks documents and encodes every chunk with the sentence encoder.

    Progress is reported in [0, 1]: the first half covers chunking, the second half encoding.
    """

    @inject
    def __init__(self, token_chunker_service: TokenChunkerService, sentence_encoder: SentenceEncoder):
        self.__logger = logging.getLogger(self.__class__.__name__)
        self.__token_chunker_service = token_chunker_service
        self.__sentence_encoder = sentence_encoder

    def chunk_and_encode(self,
                         text: str,
                         chunk_length: Optional[int] = None,
                         chunk_overlap: Optional[int] = None,
                         sequentially: bool = True,
                         max_chunks: Optional[int] = None,
                         keep_results_on_cancellation: bool = False,
                         report_progress: Optional[Callable[[float], None]] = None,
                         cancellation_token: Optional[CancellationToken] = None) -> list[EncodedChunk]:
        start_time: float = time()
        CHUNK_ENCODER_EXE_COUNTER.labels(operation="chunk_and_encode").inc()
        try:
            chunk_length, chunk_overlap = self.__resolve_sizes(chunk_length, chunk_overlap)
            chunks: list[str] = self.__token_chunker_service.chunk_tokens(
                text, chunk_length, chunk_overlap, max_chunks, self.__half_progress(report_progress)
            )
            return self.__encode_chunks(
                chunks,
                lambda index, vector: EncodedChunk(text=chunks[index], vector=vector),
                sequentially,
                keep_results_on_cancellation,
                report_progress,
                cancellation_token
            )
        finally:
            duration: float = time() - start_time
            CHUNK_ENCODER_EXE_DURATION_HISTOGRAM.labels(operation="chunk_and_encode").observe(duration)

    def chunk_and_encode_aligned(self,
                                 text: str,
                                 chunk_length: Optional[int] = None,
                                 chunk_overlap: Optional[int] = None,
                                 sequentially: bool = True,
                                 max_chunks: Optional[int] = None,
                                 keep_results_on_cancellation: bool = False,
                                 report_progress: Optional[Callable[[float], None]] = None,
                                 cancellation_token: Optional[CancellationToken] = None) -> list[EncodedChunkAligned]:
        start_time: float = time()
        CHUNK_ENCODER_EXE_COUNTER.labels(operation="chunk_and_encode_aligned").inc()
        try:
            chunk_length, chunk_overlap = self.__resolve_sizes(chunk_length, chunk_overlap)
            spans: list[AlignedSpan] = self.__token_chunker_service.chunk_tokens_aligned(
                text, chunk_length, chunk_overlap, max_chunks, self.__half_progress(report_progress)
            )
            return self.__encode_chunks(
                [span.text for span in spans],
                lambda index, vector: EncodedChunkAligned(
                    text=spans[index].text,
                    vector=vector,
                    start=spans[index].start,
                    last_start=spans[index].last_start,
                    approximate_end=spans[index].approximate_end,
                    original_text=text
                ),
                sequentially,
                keep_results_on_cancellation,
                report_progress,
                cancellation_token
            )
        finally:
            duration: float = time() - start_time
            CHUNK_ENCODER_EXE_DURATION_HISTOGRAM.labels(operation="chunk_and_encode_aligned").observe(duration)

    def chunk_and_encode_tagged(self,
                                text: str,
                                strip_tags: Callable[[str], TaggedChunk],
                                chunk_length: Optional[int] = None,
                                chunk_overlap: Optional[int] = None,
                                sequentially: bool = True,
                                max_chunks: Optional[int] = None,
                                keep_results_on_cancellation: bool = False,
                                report_progress: Optional[Callable[[float], None]] = None,
                                cancellation_token: Optional[CancellationToken] = None) -> list[TaggedEncodedChunk]:
        """Chunk text, let strip_tags split every chunk into text and tag, then encode the text."""
        start_time: float = time()
        CHUNK_ENCODER_EXE_COUNTER.labels(operation="chunk_and_encode_tagged").inc()
        try:
            chunk_length, chunk_overlap = self.__resolve_sizes(chunk_length, chunk_overlap)
            tagged_chunks: list[TaggedChunk] = [
                strip_tags(chunk)
                for chunk in self.__token_chunker_service.chunk_tokens(
                    text, chunk_length, chunk_overlap, max_chunks, self.__half_progress(report_progress)
                )
            ]
            return self.__encode_chunks(
                [chunk.text for chunk in tagged_chunks],
                lambda index, vector: TaggedEncodedChunk(text=tagged_chunks[index].text, vector=vector, tag=tagged_chunks[index].tag),
                sequentially,
                keep_results_on_cancellation,
                report_progress,
                cancellation_token
            )
        finally:
            duration: float = time() - start_time
            CHUNK_ENCODER_EXE_DURATION_HISTOGRAM.labels(operation="chunk_and_encode_tagged").observe(duration)

    def chunk_and_encode_tagged_aligned(self,
                                        text: str,
                                        strip_tags: Callable[[str], TaggedChunk],
                                        chunk_length: Optional[int] = None,
                                        chunk_overlap: Optional[int] = None,
                                        sequentially: bool = True,
                                        max_chunks: Optional[int] = None,
                                        keep_results_on_cancellation: bool = False,
                                        report_progress: Optional[Callable[[float], None]] = None,
                                        cancellation_token: Optional[CancellationToken] = None) -> list[TaggedEncodedChunkAligned]:
        """Like chunk_and_encode_tagged, but strip_tags sees the exact original substring of every chunk."""
        start_time: float = time()
        CHUNK_ENCODER_EXE_COUNTER.labels(operation="chunk_and_encode_tagged_aligned").inc()
        try:
            chunk_length, chunk_overlap = self.__resolve_sizes(chunk_length, chunk_overlap)
            spans: list[AlignedSpan] = self.__token_chunker_service.chunk_tokens_aligned(
                text, chunk_length, chunk_overlap, max_chunks, self.__half_progress(report_progress)
            )
            tagged_chunks: list[TaggedChunk] = [strip_tags(span.from_original()) for span in spans]
            return self.__encode_chunks(
                [chunk.text for chunk in tagged_chunks],
                lambda index, vector: TaggedEncodedChunkAligned(
                    text=tagged_chunks[index].text,
                    vector=vector,
                    tag=tagged_chunks[index].tag,
                    start=spans[index].start,
                    last_start=spans[index].last_start,
                    approximate_end=spans[index].approximate_end,
                    original_text=text
                ),
                sequentially,
                keep_results_on_cancellation,
                report_progress,
                cancellation_token
            )
        finally:
            duration: float = time() - start_time
            CHUNK_ENCODER_EXE_DURATION_HISTOGRAM.labels(operation="chunk_and_encode_tagged_aligned").observe(duration)

    def __encode_chunks(self,
                        texts: list[str],
                        build: Callable[[int, list[float]], EncodedChunk],
                        sequentially: bool,
                        keep_results_on_cancellation: bool,
                        report_progress: Optional[Callable[[float], None]],
                        cancellation_token: Optional[CancellationToken]) -> list:
        encoded: list = []
        try:
            if sequentially:
                for index, text in enumerate(texts):
                    if cancellation_token is not None:
                        cancellation_token.throw_if_cancellation_requested()
                    vector: list[float] = self.__sentence_encoder.encode([text], cancellation_token)[0]
                    encoded.append(build(index, vector))
                    self.__report_encoding_progress(report_progress, index, len(texts))
            else:
                vectors: list[list[float]] = self.__sentence_encoder.encode(texts, cancellation_token)
                for index, vector in enumerate(vectors):
                    encoded.append(build(index, vector))
                    self.__report_encoding_progress(report_progress, index, len(texts))
        except OperationCancelledException:
            if keep_results_on_cancellation:
                self.__logger.info(f"Encoding cancelled after {len(encoded)} of {len(texts)} chunks")
                return encoded
            raise
        return encoded

    def __resolve_sizes(self, chunk_length: Optional[int], chunk_overlap: Optional[int]) -> tuple[int, int]:
        # Out of range sizes fall back to the encoder defaults
        max_chunk_length: int = self.__sentence_encoder.max_chunk_length
        if chunk_length is None or chunk_length <= 0 or chunk_length > max_chunk_length:
            chunk_length = max_chunk_length
        if chunk_overlap is None or chunk_overlap < 0 or chunk_overlap >= chunk_length:
            chunk_overlap = chunk_length // DEFAULT_OVERLAP_DIVISOR
        return chunk_length, chunk_overlap

    @staticmethod
    def __half_progress(report_progress: Optional[Callable[[float], None]]) -> Optional[Callable[[float], None]]:
        if report_progress is None:
            return None
        return lambda progress: report_progress(progress * 0.5)

    @staticmethod
    def __report_encoding_progress(report_progress: Optional[Callable[[float], None]], index: int, total: int) -> None:
        if report_progress is not None and index % PROGRESS_REPORT_INTERVAL == 0:
            report_progress(index / total * 0.5 + 0.5)
