"""Shared domain building blocks."""

from spendwise.domain.shared.exceptions import (
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    ExternalServiceError,
    ValidationError,
)
from spendwise.domain.shared.time import days_until, ensure_tz_aware, utc_now

__all__ = [
    "ConflictError",
    "DomainException",
    "EntityNotFoundError",
    "ErrorCode",
    "ExternalServiceError",
    "ValidationError",
    "days_until",
    "ensure_tz_aware",
    "utc_now",
]
