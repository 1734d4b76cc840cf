"""Question workflows that tie the store to embedding and grouping."""

from __future__ import annotations

import logging
import time

from question_groups.core.config import Settings
from question_groups.core.metrics import GROUPING_LATENCY
from question_groups.db.questions import QuestionStore
from question_groups.embeddings.generator import HashedEmbedder
from question_groups.grouping.backfill import BackfillStats, backfill_missing
from question_groups.grouping.clusterer import clustering_order, group_by_similarity, validate_threshold
from question_groups.models.entities import SimilarityGroup, TextRecord

logger = logging.getLogger(__name__)


class QuestionService:
    """Creates questions, groups a course's questions, and backfills embeddings."""

    def __init__(self, store: QuestionStore, settings: Settings, embedder: HashedEmbedder | None = None) -> None:
        self.store = store
        self.settings = settings
        self.embedder = embedder or HashedEmbedder.get(settings.embedding_model)

    def create_question(self, course_id: int, title: str, body: str = "") -> TextRecord:
        logger.info("Creating question '%s' in course %s", title, course_id)
        embedding = None
        if self.settings.embeddings_enabled:
            text = f"{title} {body}" if body else title
            try:
                embedding = self.embedder.embed(text)
            except Exception as exc:
                # the question is still saved; backfill picks it up later
                logger.error("Failed to generate embedding for '%s': %s", title, exc, exc_info=True)
        else:
            logger.debug("Embeddings disabled - skipping embedding generation")
        record = self.store.insert(course_id, title, body, embedding=embedding)
        logger.info("Question %s saved", record.id)
        return record

    def list_questions(self, course_id: int) -> list[TextRecord]:
        return self.store.list_by_course(course_id)

    def delete_question(self, question_id: int) -> bool:
        deleted = self.store.delete(question_id)
        if deleted:
            logger.info("Question %s deleted", question_id)
        return deleted

    def grouped_questions(self, course_id: int, threshold: float | None = None) -> list[SimilarityGroup]:
        threshold = validate_threshold(self.settings.group_threshold if threshold is None else threshold)
        if not self.settings.embeddings_enabled:
            logger.warning("Embeddings disabled - cannot group questions for course %s", course_id)
            return []
        records = clustering_order(self.store.list_by_course(course_id))
        start = time.perf_counter()
        groups = group_by_similarity(records, threshold)
        elapsed = time.perf_counter() - start
        GROUPING_LATENCY.observe(elapsed)
        logger.info(
            "Grouped %s questions into %s groups",
            len(records),
            len(groups),
            extra={"ctx_course_id": course_id, "ctx_threshold": threshold, "ctx_elapsed_s": round(elapsed, 4)},
        )
        return groups

    def strict_grouped_questions(self, course_id: int) -> list[SimilarityGroup]:
        return self.grouped_questions(course_id, self.settings.strict_threshold)

    def backfill(self) -> BackfillStats:
        if not self.settings.embeddings_enabled:
            logger.info("Embeddings disabled - skipping embedding backfill")
            return BackfillStats()
        return backfill_missing(self.store.list_all(), self.embedder.embed, save_fn=self.store.save_embedding)

    def run_startup_backfill(self) -> BackfillStats | None:
        """Backfill once at startup; never let a failure stop the process."""
        if not self.settings.backfill_on_startup:
            return None
        try:
            return self.backfill()
        except Exception as exc:
            logger.error("Embedding backfill migration failed: %s", exc, exc_info=True)
            return None


__all__ = ["QuestionService"]
