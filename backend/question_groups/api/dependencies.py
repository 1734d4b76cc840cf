"""Shared FastAPI dependencies."""

from __future__ import annotations

from functools import lru_cache

from question_groups.core.config import Settings, get_settings
from question_groups.db.questions import QuestionStore
from question_groups.db.sqlite import SQLiteDatabase
from question_groups.embeddings.generator import HashedEmbedder
from question_groups.grouping.service import QuestionService

_DB: SQLiteDatabase | None = None
_SERVICE: QuestionService | None = None


@lru_cache(maxsize=1)
def get_app_settings() -> Settings:
    return get_settings()


def get_database() -> SQLiteDatabase:
    global _DB
    if _DB is None:
        db = SQLiteDatabase(get_app_settings().db_path)
        db.ensure_schema()
        _DB = db
    return _DB


def get_embedder() -> HashedEmbedder:
    return HashedEmbedder.get(get_app_settings().embedding_model)


def get_question_service() -> QuestionService:
    global _SERVICE
    if _SERVICE is None:
        embedder = get_embedder()
        _SERVICE = QuestionService(
            store=QuestionStore(get_database(), embedder=embedder),
            settings=get_app_settings(),
            embedder=embedder,
        )
    return _SERVICE


def reset_dependencies() -> None:
    """Drop cached singletons; used between tests."""
    global _DB, _SERVICE
    if _DB is not None:
        _DB.close()
    _DB = None
    _SERVICE = None
    get_app_settings.cache_clear()
    get_settings.cache_clear()


__all__ = [
    "get_app_settings",
    "get_database",
    "get_embedder",
    "get_question_service",
    "reset_dependencies",
]
