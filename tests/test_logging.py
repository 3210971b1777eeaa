import json
import logging
import sys

from surveyapp.core.logging import JsonFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="surveyapp.services.results",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Survey results retrieved (total=%d)",
        args=(3,),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_request_context():
    payload = json.loads(JsonFormatter().format(_record(request_id="req-1", duration_ms=12.5)))

    assert payload["level"] == "INFO"
    assert payload["message"] == "Survey results retrieved (total=3)"
    assert payload["request_id"] == "req-1"
    assert payload["duration_ms"] == 12.5
    assert "key" not in payload


def test_json_formatter_serializes_exceptions():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = _record()
        record.exc_info = sys.exc_info()

    payload = json.loads(JsonFormatter().format(record))

    assert "RuntimeError: boom" in payload["exc_info"]
