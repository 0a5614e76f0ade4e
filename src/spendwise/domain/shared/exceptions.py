"""Shared domain exceptions and error codes.

This module defines the base exception hierarchy and error codes for the
entire domain layer. All domain exceptions inherit from DomainException so
the presentation layer can translate them in one place.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Stable error codes for API clients.

    These codes are part of the public API contract. Should not be changed.
    """

    # Validation Errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_TOMBSTONE_KEY = "INVALID_TOMBSTONE_KEY"
    TOMBSTONE_DECODE_FAILED = "TOMBSTONE_DECODE_FAILED"

    # Not Found Errors (404)
    ENTITY_NOT_FOUND = "ENTITY_NOT_FOUND"
    TOMBSTONE_NOT_FOUND = "TOMBSTONE_NOT_FOUND"
    RECORD_NOT_FOUND = "RECORD_NOT_FOUND"

    # Conflict Errors (409)
    CONFLICT = "CONFLICT"
    RESTORE_IN_PROGRESS = "RESTORE_IN_PROGRESS"
    PARTIAL_RESTORE = "PARTIAL_RESTORE"

    # Live record the trash cannot snapshot (422)
    RECORD_SNAPSHOT_FAILED = "RECORD_SNAPSHOT_FAILED"

    # Restore rejected by the ledger (502)
    RESTORE_FAILED = "RESTORE_FAILED"

    # Storage Errors (503)
    TOMBSTONE_STORE_FAILED = "TOMBSTONE_STORE_FAILED"
    AUTHORITATIVE_STORE_FAILED = "AUTHORITATIVE_STORE_FAILED"

    # General Errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class DomainException(Exception):  # NOQA: N818
    """Base exception for all domain-related errors.

    Attributes
    ----------
    message
        Human-readable error message (safe for end users)
    code
        Stable error code for programmatic handling
    details
        Optional additional context
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code.value!r}, "
            f"details={self.details!r})"
        )


class ValidationError(DomainException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class EntityNotFoundError(DomainException):
    """Raised when a requested entity cannot be found."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.ENTITY_NOT_FOUND,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class ConflictError(DomainException):
    """Raised when an operation conflicts with existing state."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFLICT,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class ExternalServiceError(DomainException):
    """Raised when a storage backend outside the domain fails."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)
