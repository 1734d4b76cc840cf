"""Prometheus metrics instrumentation."""

from __future__ import annotations

from fastapi import Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

REGISTRY = CollectorRegistry()

REQUEST_COUNT = Counter(
    "qgrp_requests_total",
    "Total HTTP requests",
    labelnames=("endpoint", "method", "status"),
    registry=REGISTRY,
)

GROUPING_LATENCY = Histogram(
    "qgrp_grouping_latency_seconds",
    "Time spent clustering one course's questions",
    registry=REGISTRY,
)

EMBEDDINGS_GENERATED = Counter(
    "qgrp_embeddings_total",
    "Embeddings generated, by outcome",
    labelnames=("outcome",),
    registry=REGISTRY,
)

BACKFILL_RECORDS = Counter(
    "qgrp_backfill_records_total",
    "Records processed by the embedding backfill, by outcome",
    labelnames=("outcome",),
    registry=REGISTRY,
)


def metrics_response() -> Response:
    """Return Prometheus metrics as an HTTP response."""
    payload = generate_latest(REGISTRY)
    return Response(content=payload, media_type=CONTENT_TYPE_LATEST)


__all__ = [
    "REGISTRY",
    "REQUEST_COUNT",
    "GROUPING_LATENCY",
    "EMBEDDINGS_GENERATED",
    "BACKFILL_RECORDS",
    "metrics_response",
]
