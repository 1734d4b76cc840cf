"""Question and grouping API routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from question_groups.api.dependencies import get_question_service
from question_groups.grouping.service import QuestionService
from question_groups.models.dto import (
    QuestionCreateRequest,
    QuestionGroupResponse,
    QuestionResponse,
)

router = APIRouter()


@router.post("", response_model=QuestionResponse, summary="Create a question")
async def create_question(
    request: QuestionCreateRequest,
    service: QuestionService = Depends(get_question_service),
) -> QuestionResponse:
    record = service.create_question(request.course_id, request.title, request.body)
    return QuestionResponse.from_record(record)


@router.get("/course/{course_id}", response_model=list[QuestionResponse], summary="List a course's questions")
async def list_questions(
    course_id: int,
    service: QuestionService = Depends(get_question_service),
) -> list[QuestionResponse]:
    return [QuestionResponse.from_record(record) for record in service.list_questions(course_id)]


@router.delete("/{question_id}", summary="Delete a question")
async def delete_question(
    question_id: int,
    service: QuestionService = Depends(get_question_service),
) -> dict[str, str]:
    if not service.delete_question(question_id):
        raise HTTPException(status_code=404, detail="Question not found")
    return {"status": "ok"}


@router.get(
    "/grouped/{course_id}",
    response_model=list[QuestionGroupResponse],
    summary="Group a course's questions by similarity",
)
async def grouped_questions(
    course_id: int,
    threshold: float | None = Query(default=None, description="Similarity threshold in [0.0, 1.0]"),
    service: QuestionService = Depends(get_question_service),
) -> list[QuestionGroupResponse]:
    groups = service.grouped_questions(course_id, threshold)
    return [QuestionGroupResponse.from_group(group) for group in groups]


__all__ = ["router"]
