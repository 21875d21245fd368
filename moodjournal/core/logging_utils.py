"""
Logging utilities for safe logging of journal text and model usage.

Includes:
- PII/secret redaction for safe logging
- Structured usage logging for model calls
"""
import json
import logging
import re
from typing import Any, Optional


# Sensitive keys that should be redacted in logs
SENSITIVE_KEYS = [
    "api_key", "key", "token", "password", "secret", "auth",
    "email", "phone", "authorization",
]

_EMAIL_PATTERN = re.compile(r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b')
_PHONE_PATTERN = re.compile(r'\+?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}')
_CONTROL_CHARS = re.compile(r'[\x00-\x1F\x7F]')


def sanitize_for_logging(data: Any, max_len: int = 100) -> Any:
    """
    Sanitize data for safe logging - redacts PII and secrets.

    Args:
        data: The data to sanitize (can be dict, list, str, or other types)
        max_len: Maximum length for string values before truncation

    Returns:
        Sanitized version of the data safe for logging
    """
    if data is None:
        return "None"

    if isinstance(data, dict):
        sanitized = {}
        for k, v in data.items():
            if any(sensitive == str(k).lower() or sensitive in str(k).lower().split("_")
                   for sensitive in SENSITIVE_KEYS):
                sanitized[k] = "***REDACTED***"
            else:
                sanitized[k] = sanitize_for_logging(v, max_len)
        return sanitized

    if isinstance(data, (list, tuple)):
        return [sanitize_for_logging(item, max_len) for item in data]

    if isinstance(data, str):
        cleaned = sanitize_log_message(data)
        if len(cleaned) > max_len:
            return cleaned[:max_len] + "..."
        return cleaned

    if isinstance(data, (int, float, bool)):
        return data

    return sanitize_for_logging(str(data), max_len)


def sanitize_log_message(message: str) -> str:
    """
    Sanitize free text by redacting emails and phone numbers.

    Control characters and newlines are removed for single-line logging.
    """
    message = _EMAIL_PATTERN.sub('[EMAIL_REDACTED]', message)
    message = _PHONE_PATTERN.sub('[PHONE_REDACTED]', message)
    return _CONTROL_CHARS.sub(' ', message)


# =============================================================================
# STRUCTURED USAGE LOGGING
# =============================================================================

_usage_logger = logging.getLogger("MoodJournal.Usage")


def log_llm_usage(
    model: str,
    purpose: str,
    usage: Optional[dict],
    duration_ms: Optional[int] = None,
    attempts: int = 1,
) -> None:
    """
    Log a structured usage event for a generateContent call.

    Args:
        model: Model identifier (e.g., 'gemini-2.5-flash')
        purpose: Why the call was made ('extraction', 'support_message')
        usage: The response's ``usageMetadata`` block, if present
        duration_ms: Request duration in milliseconds
        attempts: Number of HTTP attempts, including retries
    """
    usage = usage or {}
    input_tokens = int(usage.get("promptTokenCount") or 0)
    output_tokens = int(usage.get("candidatesTokenCount") or 0)

    event = {
        "event": "llm_usage",
        "model": model,
        "purpose": purpose,
        "input_tokens": input_tokens,
        "output_tokens": output_tokens,
        "total_tokens": int(usage.get("totalTokenCount") or input_tokens + output_tokens),
        "attempts": attempts,
    }

    if duration_ms is not None:
        event["duration_ms"] = duration_ms

    _usage_logger.info("LLM_USAGE %s", json.dumps(event))
