"""Logging setup shared by the service, CLI and background jobs."""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import orjson

_DEFAULT_LEVEL = os.environ.get("QGRP_LOG_LEVEL", "INFO")
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
CONTEXT_PREFIX = "ctx_"


def record_context(record: logging.LogRecord) -> dict[str, Any]:
    """Collect ``ctx_*`` extras (course id, threshold, timings) without the prefix, sorted by key."""
    found = {
        key[len(CONTEXT_PREFIX):]: value
        for key, value in record.__dict__.items()
        if key.startswith(CONTEXT_PREFIX)
    }
    return dict(sorted(found.items()))


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with grouping context under ``context``."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = record_context(record)
        if context:
            payload["context"] = context
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return orjson.dumps(payload, default=str).decode("utf-8")


def configure_logging(level: str | int = _DEFAULT_LEVEL, use_json: bool = True) -> None:
    """Install a single stdout handler on the root logger; safe to call again with new settings."""
    logging.captureWarnings(True)
    root = logging.getLogger()
    root.setLevel(level.upper() if isinstance(level, str) else level)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter() if use_json else logging.Formatter(_PLAIN_FORMAT))
    root.handlers = [handler]


__all__ = ["CONTEXT_PREFIX", "JsonFormatter", "configure_logging", "record_context"]
