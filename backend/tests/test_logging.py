"""Tests for the JSON log formatter."""

import logging

import orjson

from question_groups.core.logging import JsonFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("question_groups.grouping.service", logging.INFO, __file__, 1, "Grouped %s questions", (3,), None)
    record.__dict__.update(extra)
    return record


def test_context_extras_are_nested_and_sorted() -> None:
    line = JsonFormatter().format(_record(ctx_threshold=0.3, ctx_course_id=7, ctx_elapsed_s=0.01))
    payload = orjson.loads(line)
    assert payload["message"] == "Grouped 3 questions"
    assert payload["logger"] == "question_groups.grouping.service"
    assert list(payload["context"]) == ["course_id", "elapsed_s", "threshold"]
    assert payload["context"]["course_id"] == 7


def test_records_without_context_have_no_context_key() -> None:
    payload = orjson.loads(JsonFormatter().format(_record()))
    assert "context" not in payload
    assert payload["level"] == "INFO"
