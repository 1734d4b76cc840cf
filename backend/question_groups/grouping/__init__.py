"""Similarity grouping of course questions."""

from .vector_math import cosine_similarity, euclidean_distance, is_normalized
from .clusterer import (
    DEFAULT_THRESHOLD,
    STRICT_THRESHOLD,
    clustering_order,
    group_by_similarity,
    validate_threshold,
)
from .backfill import BackfillStats, backfill_missing

__all__ = [
    "cosine_similarity",
    "euclidean_distance",
    "is_normalized",
    "DEFAULT_THRESHOLD",
    "STRICT_THRESHOLD",
    "clustering_order",
    "group_by_similarity",
    "validate_threshold",
    "BackfillStats",
    "backfill_missing",
]
