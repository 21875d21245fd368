"""
Error types and standardized error responses for the mood journal service.

Domain code raises the exceptions defined here; the handlers registered by
``register_exception_handlers`` turn them into a consistent JSON body with
correlation ID tracking.

Usage:
    from moodjournal.shared.errors import UpstreamError, ValidationError

    if not text.strip():
        raise ValidationError("Journal text is required", details={"field": "text"})

Response body (``error`` is always the human-readable message string):
    {
        "error": "Journal text is required",
        "code": "VALIDATION_ERROR",
        "details": {"field": "text"},
        "correlation_id": "ab12cd34"
    }
"""

import logging
from enum import Enum
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from moodjournal.shared.correlation import RESPONSE_HEADER

logger = logging.getLogger("MoodJournal.Errors")


class ErrorCode(str, Enum):
    """Standard error codes used across the service."""

    # Client errors (4xx)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"

    # Server errors (5xx)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


class ErrorResponse(BaseModel):
    """Body of every error response."""
    error: str
    code: str
    details: Optional[dict[str, Any]] = None
    correlation_id: Optional[str] = None


# =============================================================================
# EXCEPTIONS
# =============================================================================

class JournalServiceError(Exception):
    """Base class for errors raised by the journal pipeline."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR
    status_code: int = 500

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(JournalServiceError):
    """Malformed submission input (missing user or text)."""

    code = ErrorCode.VALIDATION_ERROR
    status_code = 400


class NotFoundError(JournalServiceError):
    """A referenced journal entry does not exist."""

    code = ErrorCode.NOT_FOUND
    status_code = 404


class UpstreamError(JournalServiceError):
    """
    The text-understanding service failed or returned unusable content.

    ``retryable`` marks transient failures (transport errors, timeouts,
    429 and 5xx responses). Parse failures are never retryable.
    """

    code = ErrorCode.EXTERNAL_SERVICE_ERROR
    status_code = 500

    def __init__(
        self,
        message: str,
        service: str = "gemini",
        upstream_status: Optional[int] = None,
        retryable: bool = False,
    ):
        details: dict[str, Any] = {"service": service}
        if upstream_status is not None:
            details["upstream_status"] = upstream_status
        super().__init__(message, details=details)
        self.service = service
        self.upstream_status = upstream_status
        self.retryable = retryable


class StoreError(JournalServiceError):
    """A read or write against the journal stores failed."""

    code = ErrorCode.DATABASE_ERROR
    status_code = 500

    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(message, details={"operation": operation} if operation else None)
        self.operation = operation


class ConfigurationError(JournalServiceError):
    """A required setting (API key, database credentials) is missing."""

    code = ErrorCode.CONFIGURATION_ERROR
    status_code = 500


# =============================================================================
# RESPONSE HELPERS
# =============================================================================

def get_correlation_id(request: Optional[Request] = None) -> Optional[str]:
    """
    Extract correlation ID from request state.

    Args:
        request: FastAPI request object (optional)

    Returns:
        Correlation ID string or None if not available
    """
    if request is None:
        return None
    return getattr(request.state, "correlation_id", None)


def error_response(
    code: ErrorCode,
    message: str,
    status_code: int,
    details: Optional[dict[str, Any]] = None,
    correlation_id: Optional[str] = None,
) -> JSONResponse:
    """
    Create a standardized JSON error response.

    Args:
        code: Error code from ErrorCode enum
        message: Human-readable error message
        status_code: HTTP status code
        details: Optional additional error details
        correlation_id: Request correlation ID for tracing

    Returns:
        JSONResponse with standardized error format
    """
    body = ErrorResponse(
        error=message,
        code=code.value,
        details=details,
        correlation_id=correlation_id,
    )
    headers = {RESPONSE_HEADER: correlation_id} if correlation_id else None
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers,
    )


def validation_error(
    message: str,
    details: Optional[dict[str, Any]] = None,
    correlation_id: Optional[str] = None,
) -> JSONResponse:
    """Create a 400 validation error response."""
    return error_response(
        code=ErrorCode.VALIDATION_ERROR,
        message=message,
        status_code=400,
        details=details,
        correlation_id=correlation_id,
    )


def internal_error(
    message: str = "Internal server error",
    correlation_id: Optional[str] = None,
) -> JSONResponse:
    """
    Create a 500 internal error response.

    Note: Be careful not to expose sensitive internal details to clients.
    """
    return error_response(
        code=ErrorCode.INTERNAL_ERROR,
        message=message,
        status_code=500,
        correlation_id=correlation_id,
    )


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

async def journal_service_error_handler(request: Request, exc: JournalServiceError) -> JSONResponse:
    """Translate a JournalServiceError into its JSON error response."""
    if exc.status_code >= 500:
        logger.error("%s: %s", exc.code.value, exc.message)
    else:
        logger.info("%s: %s", exc.code.value, exc.message)

    return error_response(
        code=exc.code,
        message=exc.message,
        status_code=exc.status_code,
        details=exc.details,
        correlation_id=get_correlation_id(request),
    )


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies with the service's 400 shape."""
    fields = [".".join(str(part) for part in err.get("loc", ())) for err in exc.errors()]
    return validation_error(
        "Invalid request body",
        details={"fields": fields},
        correlation_id=get_correlation_id(request),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler for unexpected exceptions."""
    logger.exception("Unhandled error processing %s %s", request.method, request.url.path)
    return internal_error(correlation_id=get_correlation_id(request))


def register_exception_handlers(app: FastAPI) -> None:
    """Install the service's exception handlers on a FastAPI app."""
    app.add_exception_handler(JournalServiceError, journal_service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
