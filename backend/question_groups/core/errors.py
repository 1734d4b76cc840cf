"""Error types raised by the grouping engine."""

from __future__ import annotations


class GroupingError(ValueError):
    """Base class for vector and clustering argument errors."""


class InvalidInput(GroupingError):
    """A vector argument was missing or empty."""


class DimensionMismatch(GroupingError):
    """Two vectors of different lengths were compared."""

    def __init__(self, left: int, right: int) -> None:
        super().__init__(f"Vectors must have the same dimension. Got {left} and {right}")
        self.left = left
        self.right = right


class ThresholdOutOfRange(GroupingError):
    """A similarity threshold fell outside [0.0, 1.0]."""

    def __init__(self, threshold: float) -> None:
        super().__init__(f"Threshold must be between 0.0 and 1.0, got {threshold}")
        self.threshold = threshold


__all__ = ["GroupingError", "InvalidInput", "DimensionMismatch", "ThresholdOutOfRange"]
