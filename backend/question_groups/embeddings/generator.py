"""Deterministic feature-hashing embeddings."""

from __future__ import annotations

import logging
import math
from array import array
from dataclasses import dataclass
from typing import Iterable, Mapping

from question_groups.core.metrics import EMBEDDINGS_GENERATED
from question_groups.embeddings.normalizer import normalize

logger = logging.getLogger(__name__)

EMBEDDING_DIM = 1536
ACTIVATIONS_PER_TERM = 16
ACTIVATION_SCALE = 8.0
CHAR_SUM_MULTIPLIER = 7919
LENGTH_MULTIPLIER = 6271
SPREAD_MULTIPLIER = 1009


@dataclass(slots=True)
class EmbeddingBatch:
    vectors: list[list[float]]
    model: str
    dim: int
    backend: str


class HashedEmbedder:
    """Maps stemmed terms onto fixed slots so overlapping questions share dimensions."""

    _instances: dict[str, "HashedEmbedder"] = {}

    def __init__(self, model_name: str = "hashed-1536", dim: int = EMBEDDING_DIM) -> None:
        self.model_name = model_name
        self._dim = dim
        self._backend = "hashed"

    @classmethod
    def get(cls, model_name: str = "hashed-1536") -> "HashedEmbedder":
        key = model_name or "hashed-1536"
        if key not in cls._instances:
            cls._instances[key] = HashedEmbedder(model_name=key)
        return cls._instances[key]

    @property
    def dim(self) -> int:
        return self._dim

    @property
    def backend(self) -> str:
        return self._backend

    def embed(self, text: str | None) -> list[float]:
        if text is None or not text.strip():
            EMBEDDINGS_GENERATED.labels(outcome="zero").inc()
            return zero_vector(self._dim)
        term_counts = normalize(text)
        if not term_counts:
            EMBEDDINGS_GENERATED.labels(outcome="zero").inc()
            return zero_vector(self._dim)
        logger.debug("Extracted %s terms: %s", len(term_counts), ", ".join(sorted(term_counts)[:10]))
        vector = _accumulate(term_counts, self._dim)
        if not _normalize(vector):
            EMBEDDINGS_GENERATED.labels(outcome="zero").inc()
            return zero_vector(self._dim)
        EMBEDDINGS_GENERATED.labels(outcome="vector").inc()
        return vector

    def encode(self, texts: Iterable[str | None]) -> EmbeddingBatch:
        vectors = [self.embed(text) for text in texts]
        return EmbeddingBatch(vectors=vectors, model=self.model_name, dim=self._dim, backend=self._backend)

    def as_bytes(self, vector: list[float]) -> bytes:
        return array("d", vector).tobytes()

    def from_bytes(self, payload: bytes) -> list[float]:
        floats = array("d")
        floats.frombytes(payload)
        return list(floats)


def embed(text: str | None) -> list[float]:
    """Embed ``text`` with the shared hashed embedder."""
    return HashedEmbedder.get().embed(text)


def zero_vector(dim: int = EMBEDDING_DIM) -> list[float]:
    return [0.0] * dim


def term_slots(term: str, dim: int = EMBEDDING_DIM) -> list[int]:
    """Return the dimensions a term activates."""
    char_sum = sum(ord(ch) for ch in term)
    base = char_sum * CHAR_SUM_MULTIPLIER + len(term) * LENGTH_MULTIPLIER
    return [abs((base + i * SPREAD_MULTIPLIER) % dim) for i in range(ACTIVATIONS_PER_TERM)]


def term_weight(count: int, total: int, term: str) -> float:
    specificity_boost = 1.0 + (len(term) - 3) * 0.2
    return (count / total) * specificity_boost


def _accumulate(term_counts: Mapping[str, int], dim: int) -> list[float]:
    vector = [0.0] * dim
    total = sum(term_counts.values())
    # sorted so the float sums never depend on dict insertion order
    for term in sorted(term_counts):
        increment = term_weight(term_counts[term], total, term) * ACTIVATION_SCALE
        for slot in term_slots(term, dim):
            vector[slot] += increment
    return vector


def _normalize(vector: list[float]) -> bool:
    norm = math.sqrt(sum(value * value for value in vector))
    if norm == 0:
        return False
    for idx, value in enumerate(vector):
        vector[idx] = value / norm
    return True


__all__ = ["EMBEDDING_DIM", "EmbeddingBatch", "HashedEmbedder", "embed", "term_slots", "zero_vector"]
