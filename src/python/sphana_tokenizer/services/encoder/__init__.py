from .chunk_encoder_service import ChunkEncoderService
from .sentence_encoder import SentenceEncoder

__all__ = [
    "ChunkEncoderService",
    "SentenceEncoder"
]
