"""Administrative and utility routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from question_groups.api.dependencies import get_embedder, get_question_service
from question_groups.core.metrics import metrics_response
from question_groups.embeddings.generator import HashedEmbedder
from question_groups.grouping.service import QuestionService
from question_groups.grouping.vector_math import cosine_similarity, euclidean_distance
from question_groups.models.dto import BackfillResponse, SimilarityRequest, SimilarityResponse

router = APIRouter()


@router.post("/similarity", response_model=SimilarityResponse, summary="Compare two texts")
async def compare_texts(
    request: SimilarityRequest,
    embedder: HashedEmbedder = Depends(get_embedder),
) -> SimilarityResponse:
    vector_a = embedder.embed(request.text_a)
    vector_b = embedder.embed(request.text_b)
    return SimilarityResponse(
        cosine_similarity=cosine_similarity(vector_a, vector_b),
        euclidean_distance=euclidean_distance(vector_a, vector_b),
    )


@router.post("/admin/backfill", response_model=BackfillResponse, summary="Embed questions missing a vector")
async def run_backfill(service: QuestionService = Depends(get_question_service)) -> BackfillResponse:
    stats = service.backfill()
    return BackfillResponse(**stats.to_dict())


@router.get("/metrics", summary="Prometheus metrics")
async def get_metrics():
    return metrics_response()


__all__ = ["router"]
