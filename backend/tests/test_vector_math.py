"""Tests for vector comparison helpers."""

import math

import pytest

from question_groups.core.errors import DimensionMismatch, InvalidInput
from question_groups.embeddings.generator import embed
from question_groups.grouping.vector_math import (
    cosine_similarity,
    euclidean_distance,
    is_normalized,
    is_zero_vector,
    validate_embedding,
)


def test_identical_vectors_have_similarity_one() -> None:
    vector = embed("dynamic programming memoization")
    assert cosine_similarity(vector, vector) == pytest.approx(1.0, abs=1e-4)
    assert cosine_similarity([3.0, 4.0], [3.0, 4.0]) == pytest.approx(1.0, abs=1e-4)


def test_similarity_is_symmetric() -> None:
    a = [0.2, -1.5, 3.0, 0.0]
    b = [1.0, 0.5, -0.25, 2.0]
    assert cosine_similarity(a, b) == cosine_similarity(b, a)


def test_orthogonal_and_opposite_vectors() -> None:
    assert cosine_similarity([1.0, 0.0, 0.0], [0.0, 1.0, 0.0]) == 0.0
    assert cosine_similarity([1.0, 2.0, 3.0], [-1.0, -2.0, -3.0]) == pytest.approx(-1.0)


def test_zero_vector_similarity_is_zero() -> None:
    assert cosine_similarity([0.0, 0.0], [1.0, 1.0]) == 0.0


def test_dimension_mismatch() -> None:
    with pytest.raises(DimensionMismatch) as excinfo:
        cosine_similarity([1.0, 2.0], [1.0, 2.0, 3.0])
    assert (excinfo.value.left, excinfo.value.right) == (2, 3)
    with pytest.raises(DimensionMismatch):
        euclidean_distance([1.0], [1.0, 2.0])


@pytest.mark.parametrize("a, b", [(None, [1.0]), ([1.0], None), ([], [1.0]), ([1.0], [])])
def test_cosine_rejects_missing_vectors(a, b) -> None:
    with pytest.raises(InvalidInput):
        cosine_similarity(a, b)


def test_euclidean_distance() -> None:
    assert euclidean_distance([0.0, 0.0], [3.0, 4.0]) == 5.0
    assert euclidean_distance([], []) == 0.0
    with pytest.raises(InvalidInput):
        euclidean_distance(None, [1.0])


def test_is_normalized() -> None:
    assert is_normalized([0.6, 0.8], 1e-6)
    assert not is_normalized([1.0, 1.0], 1e-6)
    assert not is_normalized([], 1e-6)
    assert not is_normalized(None, 1e-6)
    assert is_normalized([1 / math.sqrt(2)] * 2)


def test_validate_embedding() -> None:
    vector = embed("graph traversal")
    assert validate_embedding(vector) is vector
    assert is_zero_vector(embed(""))
    with pytest.raises(DimensionMismatch):
        validate_embedding([1.0, 0.0])
    with pytest.raises(InvalidInput):
        validate_embedding([])


@pytest.mark.parametrize("bad", [[float("nan"), 0.0], [float("inf"), 0.0], [0.0, float("-inf")]])
def test_non_finite_components_are_rejected(bad) -> None:
    with pytest.raises(InvalidInput):
        cosine_similarity(bad, [1.0, 0.0])
    with pytest.raises(InvalidInput):
        cosine_similarity([1.0, 0.0], bad)
    with pytest.raises(InvalidInput):
        euclidean_distance(bad, [1.0, 0.0])
