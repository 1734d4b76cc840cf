"""Internal dataclasses for questions and the groups built from them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(slots=True)
class TextRecord:
    id: Any
    title: str
    body: str
    created_at: datetime
    embedding: list[float] | None = None
    scope_id: Any = None

    @property
    def combined_text(self) -> str:
        """Title plus body, the text a question is embedded from."""
        if self.body:
            return f"{self.title} {self.body}"
        return self.title

    @property
    def has_embedding(self) -> bool:
        return bool(self.embedding)


@dataclass(slots=True)
class GroupMember:
    record: TextRecord
    score: float


@dataclass(slots=True)
class SimilarityGroup:
    leader: TextRecord
    members: list[GroupMember] = field(default_factory=list)

    @property
    def is_standalone(self) -> bool:
        return not self.members

    @property
    def size(self) -> int:
        return len(self.members) + 1

    def record_ids(self) -> list[Any]:
        return [self.leader.id, *(member.record.id for member in self.members)]


__all__ = ["TextRecord", "GroupMember", "SimilarityGroup"]
