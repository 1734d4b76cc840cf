"""Tests for the question store and service."""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from question_groups.core.config import Settings
from question_groups.core.errors import ThresholdOutOfRange
from question_groups.db.questions import QuestionStore
from question_groups.db.sqlite import SQLiteDatabase
from question_groups.grouping.service import QuestionService


@pytest.fixture
def store(tmp_path: Path) -> QuestionStore:
    db = SQLiteDatabase(tmp_path / "service.db")
    db.ensure_schema()
    yield QuestionStore(db)
    db.close()


def _service(store: QuestionStore, **overrides) -> QuestionService:
    return QuestionService(store=store, settings=Settings(db_path=store.db.db_path, **overrides))


def test_store_round_trips_embeddings_and_orders_newest_first(store: QuestionStore) -> None:
    base = datetime(2024, 3, 1, tzinfo=timezone.utc)
    first = store.insert(1, "first", created_at=base)
    second = store.insert(1, "second", embedding=[1.0] + [0.0] * 1535, created_at=base + timedelta(hours=1))
    store.insert(2, "other course", created_at=base)

    listed = store.list_by_course(1)
    assert [record.id for record in listed] == [second.id, first.id]
    assert listed[0].embedding[0] == 1.0
    assert listed[1].embedding is None
    assert listed[0].created_at == base + timedelta(hours=1)
    assert len(store.list_all()) == 3


def test_store_rejects_wrong_length_embedding(store: QuestionStore) -> None:
    record = store.insert(1, "short vector")
    with pytest.raises(ValueError):
        store.save_embedding(record, [1.0, 0.0])
    assert store.get(record.id).embedding is None


def test_create_question_embeds_title_and_body(store: QuestionStore) -> None:
    service = _service(store)
    record = service.create_question(1, "inheritance basics", "superclass constructors")
    assert store.get(record.id).has_embedding


def test_create_question_without_embeddings_when_disabled(store: QuestionStore) -> None:
    service = _service(store, embeddings_enabled=False)
    record = service.create_question(1, "inheritance basics")
    assert not store.get(record.id).has_embedding
    assert service.grouped_questions(1) == []
    assert service.backfill().to_dict() == {"total": 0, "missing": 0, "succeeded": 0, "failed": 0}


def test_create_question_survives_embedding_failure(store: QuestionStore) -> None:
    service = _service(store)

    def explode(text):
        raise RuntimeError("embedder down")

    service.embedder.embed = explode
    record = service.create_question(1, "linked lists")
    assert store.get(record.id) is not None
    assert store.get(record.id).embedding is None


def test_grouped_questions_uses_newest_first_order(store: QuestionStore) -> None:
    service = _service(store)
    base = datetime(2024, 3, 1, tzinfo=timezone.utc)
    texts = ["inheritance basics", "explain inheritance in OOP", "polymorphism examples"]
    ids = []
    for offset, text in enumerate(texts):
        record = store.insert(7, text, embedding=service.embedder.embed(text), created_at=base + timedelta(minutes=offset))
        ids.append(record.id)

    groups = service.grouped_questions(7, 0.1)
    assert [group.leader.id for group in groups] == [ids[2], ids[1]]
    assert [member.record.id for member in groups[1].members] == [ids[0]]

    assert len(service.strict_grouped_questions(7)) == 3

    with pytest.raises(ThresholdOutOfRange):
        service.grouped_questions(7, 1.1)


def test_backfill_and_startup_backfill(store: QuestionStore) -> None:
    store.insert(3, "hash tables", "open addressing")
    store.insert(3, "hash maps", "separate chaining")
    service = _service(store)

    stats = service.run_startup_backfill()
    assert stats.succeeded == 2
    assert all(record.has_embedding for record in store.list_by_course(3))
    assert service.backfill().missing == 0


def test_startup_backfill_swallows_failures(store: QuestionStore) -> None:
    service = _service(store)

    def broken_listing():
        raise RuntimeError("database locked")

    store.list_all = broken_listing
    assert service.run_startup_backfill() is None
    assert _service(store, backfill_on_startup=False).run_startup_backfill() is None


def test_malformed_blob_reads_as_missing_and_backfill_repairs_it(store: QuestionStore) -> None:
    service = _service(store)
    record = service.create_question(5, "binary heaps", "sift down")
    store.db.execute("UPDATE questions SET embedding = ? WHERE id = ?", [b"\x00" * 24, record.id])
    store.db.commit()
    assert store.get(record.id).embedding is None

    stats = service.backfill()
    assert (stats.missing, stats.succeeded, stats.failed) == (1, 1, 0)
    repaired = store.get(record.id).embedding
    assert len(repaired) == 1536
    assert repaired == service.embedder.embed("binary heaps sift down")
