"""
Request correlation IDs.

Each request gets an ID taken from ``X-Correlation-ID`` / ``X-Request-ID``
or freshly generated. It is stored on ``request.state`` (for error bodies),
in a context variable (for the logging filter), and echoed back in the
``X-Correlation-ID`` response header.
"""

import contextvars
import uuid
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

_correlation_id: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "correlation_id", default=None
)

CORRELATION_HEADERS = ("X-Correlation-ID", "X-Request-ID")
RESPONSE_HEADER = "X-Correlation-ID"


def get_correlation_id() -> Optional[str]:
    """Correlation ID of the request being handled, if any."""
    return _correlation_id.get()


def generate_correlation_id() -> str:
    """Short random ID (first 8 hex chars of a UUID4)."""
    return uuid.uuid4().hex[:8]


def _incoming_id(request: Request) -> Optional[str]:
    for header in CORRELATION_HEADERS:
        value = request.headers.get(header)
        if value:
            return value
    return None


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Attach a correlation ID to every request and its response."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = _incoming_id(request) or generate_correlation_id()
        request.state.correlation_id = correlation_id
        token = _correlation_id.set(correlation_id)
        try:
            response = await call_next(request)
        finally:
            _correlation_id.reset(token)
        response.headers[RESPONSE_HEADER] = correlation_id
        return response
