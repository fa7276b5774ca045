"""Structured Logging — JSON formatter surfaces known extra fields."""

import json
import logging

from applixy.infrastructure.observability import JSONFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("applixy.test", logging.INFO, __file__, 1, "hello %s", ("world",), None)
    record.__dict__.update(extra)
    return record


def test_json_formatter_basic_fields():
    out = json.loads(JSONFormatter().format(_record()))
    assert out["level"] == "INFO"
    assert out["logger"] == "applixy.test"
    assert out["message"] == "hello world"


def test_json_formatter_includes_known_extras_only():
    out = json.loads(JSONFormatter().format(_record(
        collection="scholarship", defaulted_fields=["title"], unrelated="x",
    )))
    assert out["collection"] == "scholarship"
    assert out["defaulted_fields"] == ["title"]
    assert "unrelated" not in out
