"""DTOs handed to the UI when it lists the trash."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from spendwise.domain.shared.exceptions import DomainException
from spendwise.domain.trash.exceptions import PartialRestoreError


@dataclass(frozen=True)
class RestoreErrorDTO:
    """Last failed restore of a tombstone, shown inline next to it."""

    code: str
    message: str
    is_partial: bool
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_exception(cls, error: DomainException) -> RestoreErrorDTO:
        return cls(
            code=error.code.value,
            message=error.message,
            is_partial=isinstance(error, PartialRestoreError),
            details=dict(error.details),
        )


@dataclass(frozen=True)
class TombstoneListItemDTO:
    """One row of the trash listing."""

    key: str
    kind: str
    original_id: str
    summary: str
    deleted_at: datetime
    days_remaining: int
    is_selected: bool = False
    is_restoring: bool = False
    last_error: Optional[RestoreErrorDTO] = None


@dataclass(frozen=True)
class TrashListingDTO:
    """The whole trash as the UI sees it, with selection state."""

    items: list[TombstoneListItemDTO]
    selected_keys: list[str]
    all_selected: bool
    retention_days: int

    @property
    def count(self) -> int:
        return len(self.items)
