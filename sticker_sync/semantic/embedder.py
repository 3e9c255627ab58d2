"""Semantic Embedder - text -> vector with a result value instead of exceptions

The embedding model is optional. When sentence-transformers is not
installed, the model cannot be loaded, or a call fails, the embedder returns
an EmbeddingResult carrying the error and the planner falls back to fuzzy
matching.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol, Sequence

import numpy as np

from sticker_sync.core.config import settings
from sticker_sync.core.exceptions import EmbeddingException
from sticker_sync.core.logging import logger


class EmbeddingStatus(str, Enum):
    """Outcome of an embedding call"""

    OK = "ok"
    UNAVAILABLE = "unavailable"  # backend could not be loaded
    FAILED = "failed"  # backend loaded but the call failed


@dataclass
class EmbeddingResult:
    """Embedding outcome.

    Attributes:
        status: call outcome
        vectors: one row per input text (OK only)
        error: what went wrong (UNAVAILABLE / FAILED only)
    """

    status: EmbeddingStatus
    vectors: Optional[np.ndarray] = None
    error: Optional[EmbeddingException] = None

    @property
    def is_ok(self) -> bool:
        return self.status == EmbeddingStatus.OK

    @property
    def vector(self) -> Optional[np.ndarray]:
        """First vector (single-text calls)"""
        if self.vectors is None or len(self.vectors) == 0:
            return None
        return self.vectors[0]

    @classmethod
    def ok(cls, vectors: np.ndarray) -> "EmbeddingResult":
        return cls(status=EmbeddingStatus.OK, vectors=vectors)

    @classmethod
    def unavailable(cls, error: EmbeddingException) -> "EmbeddingResult":
        return cls(status=EmbeddingStatus.UNAVAILABLE, error=error)

    @classmethod
    def failed(cls, error: EmbeddingException) -> "EmbeddingResult":
        return cls(status=EmbeddingStatus.FAILED, error=error)


class EmbeddingBackend(Protocol):
    """Anything that turns a batch of strings into fixed-length vectors"""

    def encode(self, texts: list[str]) -> Sequence[Sequence[float]]:
        """
        Args:
            texts: strings to embed

        Returns:
            one vector per text, all of the same length

        Raises:
            EmbeddingException: backend cannot be loaded (reported as UNAVAILABLE)
            Exception: any other failure (reported as FAILED)
        """
        ...


class SentenceTransformerBackend:
    """sentence-transformers model, loaded on first use.

    Vectors are L2-normalised so cosine similarity is a dot product.
    """

    def __init__(self, model_name: Optional[str] = None):
        self.model_name = model_name or settings.semantic_model_name
        self._model = None

    def _load(self):
        if self._model is not None:
            return self._model
        try:
            from sentence_transformers import SentenceTransformer
        except ImportError as e:
            raise EmbeddingException("load", f"sentence-transformers is not installed ({e})") from e
        try:
            self._model = SentenceTransformer(self.model_name)
        except Exception as e:
            raise EmbeddingException("load", f"model '{self.model_name}' failed to load: {e}") from e
        logger.info(f"Embedding model loaded: {self.model_name}")
        return self._model

    def encode(self, texts: list[str]) -> np.ndarray:
        model = self._load()
        return model.encode(texts, convert_to_numpy=True, normalize_embeddings=True)


def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
    """Cosine similarity of two vectors (0.0 when either is all zeros)"""
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    norm = float(np.linalg.norm(a) * np.linalg.norm(b))
    if norm == 0.0:
        return 0.0
    return float(np.dot(a, b) / norm)


def cosine_scores(vector: np.ndarray, matrix: np.ndarray) -> np.ndarray:
    """Cosine similarity of one vector against every row of a matrix"""
    vector = np.asarray(vector, dtype=float)
    matrix = np.asarray(matrix, dtype=float)
    if matrix.size == 0:
        return np.zeros(0)
    norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(vector)
    dots = matrix @ vector
    with np.errstate(divide="ignore", invalid="ignore"):
        scores = np.where(norms > 0, dots / norms, 0.0)
    return scores


class SemanticEmbedder:
    """Embedding front end with a per-process vector cache.

    Texts are cached by exact string. A backend that fails to load is
    remembered, so later calls return UNAVAILABLE immediately instead of
    retrying the load.

    Usage:
        embedder = SemanticEmbedder()
        result = embedder.embed(["Heated Seats", "Seat Heater"])
        if result.is_ok:
            embedder.similarity("Heated Seats", "Seat Heater")
    """

    def __init__(self, backend: Optional[EmbeddingBackend] = None):
        self.backend = backend or SentenceTransformerBackend()
        self._cache: dict[str, np.ndarray] = {}
        self._hits = 0
        self._misses = 0
        self._load_error: Optional[EmbeddingException] = None

    @property
    def available(self) -> bool:
        return self._load_error is None

    def embed(self, texts: Sequence[str]) -> EmbeddingResult:
        """
        Embed a batch of texts, serving cached vectors where possible.

        Args:
            texts: strings to embed

        Returns:
            EmbeddingResult (never raises)
        """
        texts = list(texts)
        if self._load_error is not None:
            return EmbeddingResult.unavailable(self._load_error)
        if not texts:
            return EmbeddingResult.ok(np.zeros((0, 0)))

        missing = [t for t in dict.fromkeys(texts) if t not in self._cache]
        self._hits += len(texts) - len(missing)
        self._misses += len(missing)

        if missing:
            try:
                encoded = np.asarray(self.backend.encode(missing), dtype=float)
            except EmbeddingException as e:
                if e.details.get("operation") == "load":
                    self._load_error = e
                    logger.warning(f"Semantic matching unavailable: {e.message}")
                    return EmbeddingResult.unavailable(e)
                logger.warning(f"Embedding call failed: {e.message}")
                return EmbeddingResult.failed(e)
            except Exception as e:
                error = EmbeddingException("encode", f"{type(e).__name__}: {e}")
                logger.warning(f"Embedding call failed: {error.message}")
                return EmbeddingResult.failed(error)

            if encoded.ndim != 2 or encoded.shape[0] != len(missing):
                error = EmbeddingException(
                    "encode",
                    f"backend returned shape {encoded.shape} for {len(missing)} texts",
                )
                logger.warning(f"Embedding call failed: {error.message}")
                return EmbeddingResult.failed(error)

            for text, vec in zip(missing, encoded):
                self._cache[text] = vec

        return EmbeddingResult.ok(np.vstack([self._cache[t] for t in texts]))

    def similarity(self, a: str, b: str) -> Optional[float]:
        """Cosine similarity of two texts, or None if embedding failed"""
        result = self.embed([a, b])
        if not result.is_ok:
            return None
        return cosine_similarity(result.vectors[0], result.vectors[1])

    def stats(self) -> dict:
        """Cache statistics"""
        total = self._hits + self._misses
        return {
            "size": len(self._cache),
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round(self._hits / total, 3) if total else 0.0,
        }

    def clear(self) -> None:
        """Drop cached vectors and forget a previous load failure"""
        self._cache.clear()
        self._hits = 0
        self._misses = 0
        self._load_error = None
