"""Question persistence on top of :class:`SQLiteDatabase`."""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime
from typing import Sequence

from question_groups.db.sqlite import SQLiteDatabase
from question_groups.embeddings.generator import EMBEDDING_DIM, HashedEmbedder
from question_groups.grouping.vector_math import validate_embedding
from question_groups.models.entities import TextRecord
from question_groups.utils.time import datetime_to_ms, ms_to_datetime, now_ms

logger = logging.getLogger(__name__)

_SELECT = "SELECT id, course_id, title, body, embedding, created_at FROM questions"


class QuestionStore:
    """Reads and writes questions and their embedding blobs."""

    def __init__(self, db: SQLiteDatabase, embedder: HashedEmbedder | None = None) -> None:
        self.db = db
        self.embedder = embedder or HashedEmbedder.get()

    def ensure_course(self, course_id: int, name: str | None = None) -> None:
        self.db.execute(
            "INSERT OR IGNORE INTO courses (id, name, created_at) VALUES (?, ?, ?)",
            [course_id, name or f"Course {course_id}", now_ms()],
        )
        self.db.commit()

    def insert(
        self,
        course_id: int,
        title: str,
        body: str = "",
        embedding: Sequence[float] | None = None,
        created_at: datetime | None = None,
    ) -> TextRecord:
        self.ensure_course(course_id)
        created_ms = datetime_to_ms(created_at) if created_at is not None else now_ms()
        blob = self._encode(embedding) if embedding else None
        cursor = self.db.execute(
            "INSERT INTO questions (course_id, title, body, embedding, created_at) VALUES (?, ?, ?, ?, ?)",
            [course_id, title, body or "", blob, created_ms],
        )
        self.db.commit()
        return TextRecord(
            id=cursor.lastrowid,
            title=title,
            body=body or "",
            created_at=ms_to_datetime(created_ms),
            embedding=list(embedding) if embedding else None,
            scope_id=course_id,
        )

    def get(self, question_id: int) -> TextRecord | None:
        row = self.db.execute(f"{_SELECT} WHERE id = ?", [question_id]).fetchone()
        return self._row_to_record(row) if row else None

    def list_by_course(self, course_id: int) -> list[TextRecord]:
        rows = self.db.query(
            f"{_SELECT} WHERE course_id = ? ORDER BY created_at DESC, id ASC",
            [course_id],
        )
        return [self._row_to_record(row) for row in rows]

    def list_all(self) -> list[TextRecord]:
        rows = self.db.query(f"{_SELECT} ORDER BY id ASC")
        return [self._row_to_record(row) for row in rows]

    def save_embedding(self, record: TextRecord, embedding: Sequence[float]) -> None:
        cursor = self.db.execute(
            "UPDATE questions SET embedding = ? WHERE id = ?",
            [self._encode(embedding), record.id],
        )
        if cursor.rowcount == 0:
            raise LookupError(f"Question {record.id} not found")
        self.db.commit()

    def delete(self, question_id: int) -> bool:
        cursor = self.db.execute("DELETE FROM questions WHERE id = ?", [question_id])
        self.db.commit()
        return cursor.rowcount > 0

    def _encode(self, embedding: Sequence[float]) -> bytes:
        validate_embedding(embedding, EMBEDDING_DIM)
        return self.embedder.as_bytes(list(embedding))

    def _decode(self, question_id: int, blob: bytes | None) -> list[float] | None:
        if not blob:
            return None
        if len(blob) != EMBEDDING_DIM * 8:
            logger.warning("Ignoring malformed embedding for question %s (%s bytes)", question_id, len(blob))
            return None
        return self.embedder.from_bytes(blob)

    def _row_to_record(self, row: sqlite3.Row) -> TextRecord:
        return TextRecord(
            id=row["id"],
            title=row["title"],
            body=row["body"] or "",
            created_at=ms_to_datetime(row["created_at"]),
            embedding=self._decode(row["id"], row["embedding"]),
            scope_id=row["course_id"],
        )


__all__ = ["QuestionStore"]
