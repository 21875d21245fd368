"""Tests for log sanitizing and the structured formatters."""

from __future__ import annotations

import json
import logging

from moodjournal.core.logging_utils import log_llm_usage, sanitize_for_logging, sanitize_log_message
from moodjournal.shared.logging_config import CorrelationIdFilter, HumanReadableFormatter, JSONFormatter


def _record(msg: str = "hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord("MoodJournal.Test", logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_sanitize_redacts_contact_details() -> None:
    text = "mail me at jane.doe@example.com or call 555-123-4567"
    assert sanitize_log_message(text) == "mail me at [EMAIL_REDACTED] or call [PHONE_REDACTED]"


def test_sanitize_removes_control_characters_and_truncates() -> None:
    assert sanitize_for_logging("line one\nline two", max_len=8) == "line one..."


def test_sanitize_redacts_secret_keys() -> None:
    data = {"api_key": "abc", "user_id": "u1", "nested": {"token": "t"}}
    assert sanitize_for_logging(data) == {
        "api_key": "***REDACTED***",
        "user_id": "u1",
        "nested": {"token": "***REDACTED***"},
    }


def test_json_formatter_includes_extras() -> None:
    record = _record("Journal submission completed", correlation_id="abc123", journal_id="42")
    entry = json.loads(JSONFormatter(service_name="svc").format(record))

    assert entry["message"] == "Journal submission completed"
    assert entry["service"] == "svc"
    assert entry["correlation_id"] == "abc123"
    assert entry["journal_id"] == "42"


def test_correlation_filter_defaults_to_dash() -> None:
    record = _record()
    assert CorrelationIdFilter().filter(record) is True
    assert record.correlation_id == "-"
    assert "correlation_id" not in json.loads(JSONFormatter().format(record))


def test_human_readable_formatter() -> None:
    record = _record("stored", correlation_id="c1", user_id="u1")
    line = HumanReadableFormatter().format(record)
    assert "[INFO] [c1] MoodJournal.Test: stored" in line
    assert "user_id=u1" in line


def test_log_llm_usage(caplog) -> None:
    with caplog.at_level(logging.INFO, logger="MoodJournal.Usage"):
        log_llm_usage("gemini-test", "extraction", {"promptTokenCount": 10, "candidatesTokenCount": 5}, attempts=2)

    message = caplog.records[-1].getMessage()
    assert message.startswith("LLM_USAGE ")
    event = json.loads(message[len("LLM_USAGE "):])
    assert event["total_tokens"] == 15
    assert event["attempts"] == 2
    assert "duration_ms" not in event
