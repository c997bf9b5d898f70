"""Structured Logging — JSONFormatter output shape.

Tests cover:
    - Base fields always present
    - Risk extras surfaced only when set
    - Exceptions rendered into the payload
"""

import json
import logging

from exposure_risk.infrastructure.observability import JSONFormatter


def _record(msg="hello", exc_info=None, **extra):
    record = logging.LogRecord(
        "exposure_risk.test", logging.INFO, __file__, 1, msg, None, exc_info,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_base_fields_present():
    payload = json.loads(JSONFormatter().format(_record()))
    assert payload["level"] == "INFO"
    assert payload["logger"] == "exposure_risk.test"
    assert payload["message"] == "hello"
    assert "timestamp" in payload
    assert "risk_level" not in payload


def test_risk_extras_surfaced():
    payload = json.loads(JSONFormatter().format(
        _record(risk_level="increased", risk_score=25.0, error_code="X"),
    ))
    assert payload["risk_level"] == "increased"
    assert payload["risk_score"] == 25.0
    assert payload["error_code"] == "X"


def test_exception_rendered():
    try:
        raise ValueError("boom")
    except ValueError:
        import sys
        record = _record(exc_info=sys.exc_info())
    payload = json.loads(JSONFormatter().format(record))
    assert "ValueError: boom" in payload["exception"]
