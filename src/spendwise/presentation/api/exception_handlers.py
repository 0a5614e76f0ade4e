"""Centralized exception handlers for the FastAPI application.

Domain exceptions are mapped to HTTP responses with a consistent error
format.

Error Response Format:
    {
        "detail": "Human-readable error message",
        "code": "MACHINE_READABLE_ERROR_CODE"
    }

Partial restores additionally carry ``details`` (``parent_id``,
``pending_participants``) so a client can tell them apart from a clean
failure and offer a fix-up.
"""

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from spendwise.domain.shared.exceptions import (
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    ExternalServiceError,
    ValidationError,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Error Code to HTTP Status Mapping
# =============================================================================

ERROR_CODE_TO_STATUS: dict[ErrorCode, int] = {
    # 400 Bad Request - validation errors
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_TOMBSTONE_KEY: status.HTTP_400_BAD_REQUEST,
    # 404 Not Found
    ErrorCode.ENTITY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.TOMBSTONE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.RECORD_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    # 409 Conflict
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.RESTORE_IN_PROGRESS: status.HTTP_409_CONFLICT,
    ErrorCode.PARTIAL_RESTORE: status.HTTP_409_CONFLICT,
    # 422 Unprocessable Entity - the live record cannot be snapshotted
    ErrorCode.RECORD_SNAPSHOT_FAILED: status.HTTP_422_UNPROCESSABLE_ENTITY,
    # 502 Bad Gateway - the ledger rejected a restore
    ErrorCode.RESTORE_FAILED: status.HTTP_502_BAD_GATEWAY,
    # 503 Service Unavailable - a storage medium is failing
    ErrorCode.TOMBSTONE_STORE_FAILED: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.AUTHORITATIVE_STORE_FAILED: status.HTTP_503_SERVICE_UNAVAILABLE,
    # 500 Internal Server Error
    ErrorCode.TOMBSTONE_DECODE_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# Codes whose details are safe and useful to return to the client
CODES_WITH_DETAILS = frozenset({ErrorCode.PARTIAL_RESTORE})


def _get_status_for_exception(exc: DomainException) -> int:
    """Determine HTTP status code for a domain exception.

    Uses the error code mapping, with fallback based on exception type.
    """
    if exc.code in ERROR_CODE_TO_STATUS:
        return ERROR_CODE_TO_STATUS[exc.code]

    if isinstance(exc, EntityNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, ConflictError):
        return status.HTTP_409_CONFLICT
    if isinstance(exc, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, ExternalServiceError):
        return status.HTTP_503_SERVICE_UNAVAILABLE

    return status.HTTP_400_BAD_REQUEST


def _create_error_response(
    status_code: int,
    message: str,
    code: str,
    details: Optional[dict[str, Any]] = None,
) -> JSONResponse:
    """Create a standardized error response."""
    content: dict[str, Any] = {"detail": message, "code": code}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI application.

    Parameters
    ----------
    app
        The FastAPI application instance
    """

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle all domain exceptions with structured response."""
        status_code = _get_status_for_exception(exc)

        logger.warning(
            "Domain exception on %s %s: %s (code=%s, details=%s)",
            request.method,
            request.url.path,
            exc.message,
            exc.code.value,
            exc.details,
        )

        return _create_error_response(
            status_code=status_code,
            message=exc.message,
            code=exc.code.value,
            details=dict(exc.details) if exc.code in CODES_WITH_DETAILS else None,
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unhandled exceptions with consistent error format."""
        logger.exception(
            "Unhandled exception on %s %s: %s",
            request.method,
            request.url.path,
            exc,
        )
        return _create_error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message="An internal error occurred",
            code=ErrorCode.INTERNAL_ERROR.value,
        )
