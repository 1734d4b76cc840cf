"""One-shot job that fills in embeddings for records stored without one."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable

from question_groups.core.metrics import BACKFILL_RECORDS
from question_groups.models.entities import TextRecord

logger = logging.getLogger(__name__)

EmbedFn = Callable[[str], list[float]]
SaveFn = Callable[[TextRecord, list[float]], None]


@dataclass(slots=True)
class BackfillStats:
    total: int = 0
    missing: int = 0
    succeeded: int = 0
    failed: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "missing": self.missing,
            "succeeded": self.succeeded,
            "failed": self.failed,
        }


def backfill_missing(
    records: Iterable[TextRecord],
    embed_fn: EmbedFn,
    save_fn: SaveFn,
) -> BackfillStats:
    """Embed and save every record whose embedding is missing or empty.

    A failure on one record is logged and counted; the rest of the batch
    still runs. Records that already carry an embedding are never touched,
    so running the job again only retries what is still missing.
    """
    all_records = list(records)
    pending = [record for record in all_records if not record.embedding]
    stats = BackfillStats(total=len(all_records), missing=len(pending))
    if not pending:
        logger.info("No records missing embeddings")
        return stats

    logger.info("Backfilling embeddings for %s records", len(pending))
    for record in pending:
        try:
            vector = embed_fn(record.combined_text)
            save_fn(record, vector)
        except Exception as exc:
            stats.failed += 1
            BACKFILL_RECORDS.labels(outcome="failed").inc()
            logger.error("Failed to backfill embedding for record %s: %s", record.id, exc)
            continue
        record.embedding = vector
        stats.succeeded += 1
        BACKFILL_RECORDS.labels(outcome="succeeded").inc()
        logger.debug("Backfilled embedding for record %s", record.id)

    logger.info("Embedding backfill completed: %s succeeded, %s failed", stats.succeeded, stats.failed)
    return stats


__all__ = ["BackfillStats", "backfill_missing"]
