"""Greedy leader-based clustering of question embeddings."""

from __future__ import annotations

import logging
import math
from typing import Iterable, Sequence

from question_groups.core.errors import ThresholdOutOfRange
from question_groups.grouping.vector_math import cosine_similarity
from question_groups.models.entities import GroupMember, SimilarityGroup, TextRecord

logger = logging.getLogger(__name__)

# Default of the public grouping surface.
DEFAULT_THRESHOLD = 0.3
# Default of the internal no-argument overload; kept separate on purpose.
STRICT_THRESHOLD = 0.75


def validate_threshold(threshold: float) -> float:
    if threshold is None or math.isnan(threshold) or not 0.0 <= threshold <= 1.0:
        raise ThresholdOutOfRange(threshold)
    return threshold


def clustering_order(records: Iterable[TextRecord]) -> list[TextRecord]:
    """Newest first, ties broken by ascending id."""
    by_id = sorted(records, key=lambda record: record.id)
    return sorted(by_id, key=lambda record: record.created_at, reverse=True)


def group_by_similarity(
    records: Sequence[TextRecord],
    threshold: float = DEFAULT_THRESHOLD,
) -> list[SimilarityGroup]:
    """Cluster ``records`` in the order given.

    Each record not yet assigned leads a new group and absorbs every later or
    earlier unassigned record whose cosine similarity to it is at least
    ``threshold``. Records without an embedding are left out entirely; a
    leader that absorbs nothing is still returned as a singleton group.
    """
    validate_threshold(threshold)
    candidates = [record for record in records if record.embedding]
    skipped = len(records) - len(candidates)
    if skipped:
        logger.info("Excluding %s of %s records without embeddings", skipped, len(records))

    groups: list[SimilarityGroup] = []
    assigned: set = set()
    for leader in candidates:
        if leader.id in assigned:
            continue
        members: list[GroupMember] = []
        for other in candidates:
            if other.id == leader.id or other.id in assigned:
                continue
            try:
                score = cosine_similarity(leader.embedding, other.embedding)
            except Exception:
                logger.exception("Skipping pair %s/%s: similarity failed", leader.id, other.id)
                continue
            logger.debug("Similarity between %s and %s: %.4f", leader.id, other.id, score)
            if score >= threshold:
                members.append(GroupMember(record=other, score=score))
                assigned.add(other.id)
        members.sort(key=lambda member: member.score, reverse=True)
        groups.append(SimilarityGroup(leader=leader, members=members))
        assigned.add(leader.id)
        if members:
            logger.debug("Group led by %s collected %s similar records", leader.id, len(members))

    logger.info("Grouping complete: %s groups from %s records", len(groups), len(candidates))
    return groups


__all__ = [
    "DEFAULT_THRESHOLD",
    "STRICT_THRESHOLD",
    "clustering_order",
    "group_by_similarity",
    "validate_threshold",
]
