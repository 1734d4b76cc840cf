"""Tests for embedding utilities."""

import math

import pytest

from question_groups.embeddings.generator import (
    EMBEDDING_DIM,
    HashedEmbedder,
    embed,
    term_slots,
)
from question_groups.grouping.vector_math import cosine_similarity, is_normalized


def test_embedding_is_deterministic() -> None:
    text = "How does garbage collection handle circular references?"
    first = embed(text)
    second = embed(text)
    assert first == second
    assert len(first) == EMBEDDING_DIM


@pytest.mark.parametrize("text", ["", "   ", None, "how do I use this code?"])
def test_empty_or_stopword_text_yields_zero_vector(text) -> None:
    vector = embed(text)
    assert len(vector) == EMBEDDING_DIM
    assert all(value == 0.0 for value in vector)


def test_non_zero_embedding_is_unit_length() -> None:
    vector = embed("Binary search trees and balanced rotations")
    assert is_normalized(vector, 1e-3)
    assert abs(math.sqrt(sum(v * v for v in vector)) - 1.0) < 1e-6


def test_term_slots_are_distinct_and_in_range() -> None:
    slots = term_slots("inheritance")
    assert len(slots) == 16
    assert len(set(slots)) == 16
    assert all(0 <= slot < EMBEDDING_DIM for slot in slots)
    assert slots[0] == 1099


def test_single_term_activates_sixteen_equal_slots() -> None:
    vector = embed("inheritance")
    active = [value for value in vector if value]
    assert len(active) == 16
    assert all(abs(value - 0.25) < 1e-12 for value in active)


def test_overlapping_questions_are_more_similar() -> None:
    base = embed("inheritance basics")
    related = embed("explain inheritance in OOP")
    unrelated = embed("polymorphism examples")
    assert cosine_similarity(base, related) > 0.5
    assert cosine_similarity(base, unrelated) == 0.0


def test_encode_batch_and_bytes_codec() -> None:
    embedder = HashedEmbedder.get()
    batch = embedder.encode(["linked lists", "hash tables"])
    assert batch.dim == EMBEDDING_DIM
    assert batch.backend == "hashed"
    assert len(batch.vectors) == 2
    payload = embedder.as_bytes(batch.vectors[0])
    assert len(payload) == EMBEDDING_DIM * 8
    assert embedder.from_bytes(payload) == batch.vectors[0]


def test_registry_returns_shared_instance() -> None:
    assert HashedEmbedder.get() is HashedEmbedder.get("hashed-1536")
