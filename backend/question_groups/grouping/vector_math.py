"""Vector arithmetic used to compare embeddings."""

from __future__ import annotations

import math
from typing import Sequence

from question_groups.core.errors import DimensionMismatch, InvalidInput
from question_groups.embeddings.generator import EMBEDDING_DIM


def cosine_similarity(a: Sequence[float] | None, b: Sequence[float] | None) -> float:
    """Return ``dot(a, b) / (|a| * |b|)``, or 0.0 when either norm is zero."""
    _check_pair(a, b, allow_empty=False)
    dot = 0.0
    norm_a = 0.0
    norm_b = 0.0
    for x, y in zip(a, b):
        dot += x * y
        norm_a += x * x
        norm_b += y * y
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0
    similarity = dot / (math.sqrt(norm_a) * math.sqrt(norm_b))
    return max(-1.0, min(1.0, similarity))


def euclidean_distance(a: Sequence[float] | None, b: Sequence[float] | None) -> float:
    _check_pair(a, b, allow_empty=True)
    return math.sqrt(sum((x - y) * (x - y) for x, y in zip(a, b)))


def l2_norm(vector: Sequence[float]) -> float:
    return math.sqrt(sum(value * value for value in vector))


def is_normalized(vector: Sequence[float] | None, tolerance: float = 1e-6) -> bool:
    """True when the vector has unit length within ``tolerance``."""
    if not vector:
        return False
    return abs(l2_norm(vector) - 1.0) < tolerance


def is_zero_vector(vector: Sequence[float]) -> bool:
    return all(value == 0.0 for value in vector)


def validate_embedding(vector: Sequence[float] | None, dim: int = EMBEDDING_DIM) -> Sequence[float]:
    """Reject vectors that cannot be a stored embedding."""
    if not vector:
        raise InvalidInput("Embedding cannot be null or empty")
    if len(vector) != dim:
        raise DimensionMismatch(len(vector), dim)
    return vector


def _check_pair(a: Sequence[float] | None, b: Sequence[float] | None, allow_empty: bool) -> None:
    if a is None or b is None:
        raise InvalidInput("Vectors cannot be null")
    if not allow_empty and (len(a) == 0 or len(b) == 0):
        raise InvalidInput("Vectors cannot be empty")
    if len(a) != len(b):
        raise DimensionMismatch(len(a), len(b))
    if not all(math.isfinite(value) for value in a) or not all(math.isfinite(value) for value in b):
        raise InvalidInput("Vectors must contain only finite values")


__all__ = [
    "cosine_similarity",
    "euclidean_distance",
    "is_normalized",
    "is_zero_vector",
    "l2_norm",
    "validate_embedding",
]
