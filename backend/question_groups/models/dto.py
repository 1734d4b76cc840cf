"""Pydantic DTOs exposed via API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from question_groups.models.entities import SimilarityGroup, TextRecord


class QuestionCreateRequest(BaseModel):
    course_id: int = Field(ge=1)
    title: str = Field(min_length=1)
    body: str = ""


class QuestionResponse(BaseModel):
    id: int
    course_id: int | None
    title: str
    body: str
    created_at: datetime
    has_embedding: bool

    @classmethod
    def from_record(cls, record: TextRecord) -> "QuestionResponse":
        return cls(
            id=record.id,
            course_id=record.scope_id,
            title=record.title,
            body=record.body,
            created_at=record.created_at,
            has_embedding=record.has_embedding,
        )


class SimilarQuestionResponse(BaseModel):
    question: QuestionResponse
    similarity_score: float


class QuestionGroupResponse(BaseModel):
    main_question: QuestionResponse
    similar_questions: list[SimilarQuestionResponse]
    total_similar: int

    @classmethod
    def from_group(cls, group: SimilarityGroup) -> "QuestionGroupResponse":
        similar = [
            SimilarQuestionResponse(
                question=QuestionResponse.from_record(member.record),
                similarity_score=member.score,
            )
            for member in group.members
        ]
        return cls(
            main_question=QuestionResponse.from_record(group.leader),
            similar_questions=similar,
            total_similar=len(similar),
        )


class SimilarityRequest(BaseModel):
    text_a: str
    text_b: str


class SimilarityResponse(BaseModel):
    cosine_similarity: float
    euclidean_distance: float


class BackfillResponse(BaseModel):
    total: int
    missing: int
    succeeded: int
    failed: int


__all__ = [
    "QuestionCreateRequest",
    "QuestionResponse",
    "SimilarQuestionResponse",
    "QuestionGroupResponse",
    "SimilarityRequest",
    "SimilarityResponse",
    "BackfillResponse",
]
