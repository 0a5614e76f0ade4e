"""Schemas for the trash and records endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from spendwise.application.dtos.trash import (
    RestoreErrorDTO,
    TombstoneListItemDTO,
    TrashListingDTO,
)
from spendwise.domain.trash.entities import Tombstone
from spendwise.domain.trash.value_objects import RestoreResult


class RestoreErrorResponse(BaseModel):
    """Why the last restore of a tombstone did not complete."""

    code: str
    message: str
    is_partial: bool = Field(
        description="True if some rows were written (the bill exists without participants)",
    )
    details: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_dto(cls, dto: RestoreErrorDTO) -> RestoreErrorResponse:
        return cls(
            code=dto.code,
            message=dto.message,
            is_partial=dto.is_partial,
            details=dto.details,
        )


class TombstoneResponse(BaseModel):
    """One entry of the trash."""

    key: str = Field(description="Stable key '<kind>:<original id>'")
    kind: str
    original_id: str
    summary: str
    deleted_at: datetime
    days_remaining: int = Field(description="Days until the entry may be purged")
    is_selected: bool = False
    is_restoring: bool = False
    last_error: Optional[RestoreErrorResponse] = None

    @classmethod
    def from_dto(cls, dto: TombstoneListItemDTO) -> TombstoneResponse:
        return cls(
            key=dto.key,
            kind=dto.kind,
            original_id=dto.original_id,
            summary=dto.summary,
            deleted_at=dto.deleted_at,
            days_remaining=dto.days_remaining,
            is_selected=dto.is_selected,
            is_restoring=dto.is_restoring,
            last_error=(
                RestoreErrorResponse.from_dto(dto.last_error) if dto.last_error else None
            ),
        )


class TrashListingResponse(BaseModel):
    """The trash, newest deletion first, with selection state."""

    items: list[TombstoneResponse]
    count: int
    selected_keys: list[str]
    all_selected: bool
    retention_days: int

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "items": [
                    {
                        "key": "expense:e1",
                        "kind": "expense",
                        "original_id": "e1",
                        "summary": "Coffee · 4.50",
                        "deleted_at": "2024-03-01T10:00:00+00:00",
                        "days_remaining": 30,
                        "is_selected": False,
                        "is_restoring": False,
                        "last_error": None,
                    },
                ],
                "count": 1,
                "selected_keys": [],
                "all_selected": False,
                "retention_days": 30,
            },
        },
    )

    @classmethod
    def from_dto(cls, dto: TrashListingDTO) -> TrashListingResponse:
        return cls(
            items=[TombstoneResponse.from_dto(item) for item in dto.items],
            count=dto.count,
            selected_keys=dto.selected_keys,
            all_selected=dto.all_selected,
            retention_days=dto.retention_days,
        )


class ToggleSelectionRequest(BaseModel):
    """Request to flip the selection of one trash entry."""

    key: str = Field(..., min_length=3, description="Trash key '<kind>:<id>'")


class SelectionResponse(BaseModel):
    """Selection state after a selection change."""

    selected_keys: list[str]
    all_selected: bool
    is_selected: Optional[bool] = Field(
        None,
        description="New state of the toggled key (toggle only)",
    )


class PurgeResponse(BaseModel):
    """How many entries were permanently removed."""

    purged: int


class RestoreResponse(BaseModel):
    """A completed restore."""

    key: str
    status: str
    restored_id: str = Field(description="Id the ledger assigned to the record")

    @classmethod
    def from_result(cls, result: RestoreResult) -> RestoreResponse:
        return cls(
            key=str(result.key),
            status=result.status.value,
            restored_id=result.restored_id or "",
        )


class MovedToTrashResponse(BaseModel):
    """A record that was deleted and now sits in the trash."""

    key: str
    summary: str
    deleted_at: datetime

    @classmethod
    def from_tombstone(cls, tombstone: Tombstone) -> MovedToTrashResponse:
        return cls(
            key=str(tombstone.key),
            summary=tombstone.summary,
            deleted_at=tombstone.deleted_at,
        )
