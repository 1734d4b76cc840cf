"""Test fixtures for the question grouping service."""

from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))


@pytest.fixture(autouse=True)
def reset_state(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset global singletons and environment between tests."""
    monkeypatch.setenv("QGRP_DB_PATH", str(tmp_path / "questions.db"))
    monkeypatch.delenv("QGRP_CONFIG", raising=False)
    monkeypatch.delenv("QGRP_EMBEDDINGS_ENABLED", raising=False)

    from question_groups.api import dependencies as deps
    from question_groups.embeddings.generator import HashedEmbedder

    HashedEmbedder._instances.clear()
    deps.reset_dependencies()
    yield
    HashedEmbedder._instances.clear()
    deps.reset_dependencies()


@pytest.fixture
def make_record():
    """Build TextRecords with increasing creation times."""
    from question_groups.models.entities import TextRecord

    base = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def _make(record_id, title, body="", embedding=None, minutes=None):
        offset = record_id if minutes is None else minutes
        return TextRecord(
            id=record_id,
            title=title,
            body=body,
            created_at=base + timedelta(minutes=offset),
            embedding=embedding,
        )

    return _make
