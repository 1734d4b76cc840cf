"""FastAPI application setup for the question grouping service."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from question_groups.api.dependencies import get_app_settings, get_question_service
from question_groups.api.routes_admin import router as admin_router
from question_groups.api.routes_questions import router as questions_router
from question_groups.core.errors import GroupingError, ThresholdOutOfRange
from question_groups.core.logging import configure_logging
from question_groups.core.metrics import REQUEST_COUNT

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Question Groups",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.include_router(questions_router, prefix="/questions", tags=["questions"])
app.include_router(admin_router, prefix="", tags=["admin"])


@app.middleware("http")
async def count_requests(request: Request, call_next):
    response = await call_next(request)
    REQUEST_COUNT.labels(endpoint=request.url.path, method=request.method, status=str(response.status_code)).inc()
    return response


@app.exception_handler(GroupingError)
async def handle_grouping_error(_request: Request, exc: GroupingError) -> JSONResponse:
    label = "Threshold Out Of Range" if isinstance(exc, ThresholdOutOfRange) else "Invalid Vector Input"
    return JSONResponse(status_code=400, content={"error": label, "message": str(exc)})


@app.on_event("startup")
async def startup() -> None:
    """Apply logging config and run the one-shot embedding backfill."""
    settings = get_app_settings()
    configure_logging(settings.log_level, use_json=settings.log_json)
    service = get_question_service()
    if settings.embeddings_enabled:
        stats = service.run_startup_backfill()
        if stats is not None:
            logger.info("Startup backfill: %s", stats.to_dict())
    else:
        logger.info("Embeddings disabled - skipping embedding backfill")


@app.get("/health", tags=["admin"])
def health() -> dict[str, bool]:
    """Simple liveness check."""
    return {"ok": True}
