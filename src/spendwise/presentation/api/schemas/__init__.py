"""API request and response schemas."""

from spendwise.presentation.api.schemas.common import ErrorResponse, HealthResponse
from spendwise.presentation.api.schemas.trash import (
    MovedToTrashResponse,
    PurgeResponse,
    RestoreErrorResponse,
    RestoreResponse,
    SelectionResponse,
    ToggleSelectionRequest,
    TombstoneResponse,
    TrashListingResponse,
)

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "MovedToTrashResponse",
    "PurgeResponse",
    "RestoreErrorResponse",
    "RestoreResponse",
    "SelectionResponse",
    "ToggleSelectionRequest",
    "TombstoneResponse",
    "TrashListingResponse",
]
