from typing import Optional
import numpy as np
import pytest
from injector import Injector, Module, provider, singleton
from sphana_tokenizer import (
    CancellationToken,
    ChunkEncoderService,
    OperationCancelledException,
    SentenceEncoder,
    TokenizerModule,
    WordPieceTokenizer
)
from sphana_tokenizer.models import EncodedBatch, TaggedChunk

TEXT = "the cat sat on the mat"


class TokenCountingEncoder(SentenceEncoder):
    """Encodes every row as the number of real tokens it holds."""

    def __init__(self, tokenizer: WordPieceTokenizer, max_chunk_length: int):
        super().__init__(tokenizer, max_chunk_length)
        self.calls: list[int] = []
        self.cancel_after: Optional[int] = None
        self.cancellation_token: Optional[CancellationToken] = None

    def encode_batch(self, batch: EncodedBatch) -> np.ndarray:
        self.calls.append(batch.batch_size)
        if self.cancel_after is not None and len(self.calls) >= self.cancel_after:
            self.cancellation_token.cancel()
        return batch.attention_mask.sum(axis=1, keepdims=True).astype(np.float32)


class EncoderModule(Module):

    @singleton
    @provider
    def provide_sentence_encoder(self, tokenizer: WordPieceTokenizer) -> SentenceEncoder:
        return TokenCountingEncoder(tokenizer, max_chunk_length=4)


@pytest.fixture
def injector(config, vocabulary) -> Injector:
    return Injector([TokenizerModule(config, vocabulary), EncoderModule()])


@pytest.fixture
def service(injector) -> ChunkEncoderService:
    return injector.get(ChunkEncoderService)


@pytest.fixture
def encoder(injector) -> TokenCountingEncoder:
    return injector.get(SentenceEncoder)


def test_chunk_and_encode(service, encoder):
    chunks = service.chunk_and_encode(TEXT, chunk_length=3, chunk_overlap=1)

    assert [chunk.text for chunk in chunks] == ["the cat sat", "sat on the", "the mat"]
    assert [chunk.vector for chunk in chunks] == [[5.0], [5.0], [4.0]]
    assert encoder.calls == [1, 1, 1]


def test_chunk_and_encode_in_one_batch(service, encoder):
    chunks = service.chunk_and_encode(TEXT, chunk_length=3, chunk_overlap=1, sequentially=False)

    assert [chunk.vector for chunk in chunks] == [[5.0], [5.0], [4.0]]
    assert encoder.calls == [3]


def test_default_sizes_follow_encoder(service):
    chunks = service.chunk_and_encode(TEXT)
    assert [chunk.text for chunk in chunks] == ["the cat sat on", "the mat"]


def test_chunk_length_is_capped_by_encoder(service):
    chunks = service.chunk_and_encode(TEXT, chunk_length=10, chunk_overlap=0)
    assert [chunk.text for chunk in chunks] == ["the cat sat on", "the mat"]


@pytest.mark.parametrize("chunk_length,chunk_overlap", [
    (0, 0),
    (-3, None),
    (None, 100),
    (4, 4),
    (None, -1),
])
def test_out_of_range_sizes_fall_back_to_defaults(service, chunk_length, chunk_overlap):
    chunks = service.chunk_and_encode(TEXT, chunk_length=chunk_length, chunk_overlap=chunk_overlap)
    assert [chunk.text for chunk in chunks] == ["the cat sat on", "the mat"]


def test_chunk_and_encode_aligned(service):
    text = "Café dogs on the mat"
    chunks = service.chunk_and_encode_aligned(text, chunk_length=3, chunk_overlap=0)

    assert [chunk.text for chunk in chunks] == ["cafe dogs", "on the mat"]
    assert [(chunk.start, chunk.approximate_end) for chunk in chunks] == [(0, 9), (10, 20)]
    assert [chunk.from_original().text for chunk in chunks] == ["Café dogs", "on the mat"]
    assert chunks[0].from_original().vector == chunks[0].vector


def test_chunk_and_encode_tagged(service):
    chunks = service.chunk_and_encode_tagged(
        TEXT,
        lambda chunk: TaggedChunk(text=chunk.replace("the ", ""), tag=chunk.split(" ")[0]),
        chunk_length=3,
        chunk_overlap=1
    )

    assert [(chunk.text, chunk.tag) for chunk in chunks] == [("cat sat", "the"), ("sat on the", "sat"), ("mat", "the")]
    assert [chunk.vector for chunk in chunks] == [[4.0], [5.0], [3.0]]


def test_chunk_and_encode_tagged_aligned_sees_original(service):
    seen: list[str] = []

    def strip_tags(chunk: str) -> TaggedChunk:
        seen.append(chunk)
        return TaggedChunk(text=chunk, tag=len(chunk))

    chunks = service.chunk_and_encode_tagged_aligned("Café dogs", strip_tags, chunk_length=3, chunk_overlap=0)

    assert seen == ["Café dogs"]
    assert chunks[0].tag == 9
    assert chunks[0].from_original().tag == 9


def test_cancellation_raises(service):
    cancellation_token = CancellationToken()
    cancellation_token.cancel()

    with pytest.raises(OperationCancelledException):
        service.chunk_and_encode(TEXT, chunk_length=3, chunk_overlap=1, cancellation_token=cancellation_token)


def test_cancellation_keeps_encoded_chunks(service, encoder):
    cancellation_token = CancellationToken()
    encoder.cancellation_token = cancellation_token
    encoder.cancel_after = 1

    chunks = service.chunk_and_encode(
        TEXT,
        chunk_length=3,
        chunk_overlap=1,
        keep_results_on_cancellation=True,
        cancellation_token=cancellation_token
    )

    assert [chunk.text for chunk in chunks] == ["the cat sat"]


def test_progress_covers_chunking_and_encoding(service):
    progress: list[float] = []
    service.chunk_and_encode(TEXT, chunk_length=3, chunk_overlap=1, report_progress=progress.append)

    assert progress[0] == pytest.approx(0.0005)
    assert max(progress) >= 0.5
    assert all(0.0 <= value <= 1.0 for value in progress)


def test_encode_empty_sentences(encoder):
    assert encoder.encode([]) == []
