"""Common schemas shared across API endpoints."""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def _utc_now() -> datetime:
    """Return current UTC time (timezone-aware)."""
    return datetime.now(UTC)


class ErrorResponse(BaseModel):
    """Standard error response schema."""

    detail: str = Field(..., description="Error message")
    code: str | None = Field(None, description="Error code for programmatic handling")
    details: dict[str, Any] | None = Field(
        None,
        description="Structured context, present for partial restores",
    )
    timestamp: datetime = Field(
        default_factory=_utc_now,
        description="When the error occurred",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"detail": "Nothing in the trash", "code": "TOMBSTONE_NOT_FOUND"},
        },
    )


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")
