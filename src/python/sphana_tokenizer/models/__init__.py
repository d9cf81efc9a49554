from .aligned_span import AlignedSpan
from .encoded_batch import EncodedBatch
from .encoded_chunk import EncodedChunk
from .encoded_chunk_aligned import EncodedChunkAligned
from .special_tokens import SpecialTokens
from .tagged_chunk import TaggedChunk
from .tagged_encoded_chunk import TaggedEncodedChunk
from .tagged_encoded_chunk_aligned import TaggedEncodedChunkAligned
from .tokenized_token import TokenizedToken
from .tokenized_token_aligned import TokenizedTokenAligned

__all__ = [
    "AlignedSpan",
    "EncodedBatch",
    "EncodedChunk",
    "EncodedChunkAligned",
    "SpecialTokens",
    "TaggedChunk",
    "TaggedEncodedChunk",
    "TaggedEncodedChunkAligned",
    "TokenizedToken",
    "TokenizedTokenAligned"
]
