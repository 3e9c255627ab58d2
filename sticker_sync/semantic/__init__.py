"""Optional semantic (embedding) matching."""

from .embedder import (
    EmbeddingBackend,
    EmbeddingResult,
    EmbeddingStatus,
    SemanticEmbedder,
    SentenceTransformerBackend,
    cosine_scores,
    cosine_similarity,
)

__all__ = [
    "EmbeddingBackend",
    "EmbeddingResult",
    "EmbeddingStatus",
    "SemanticEmbedder",
    "SentenceTransformerBackend",
    "cosine_scores",
    "cosine_similarity",
]
