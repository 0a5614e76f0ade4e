"""Outcome of a single restore attempt."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from spendwise.domain.shared.exceptions import DomainException
from spendwise.domain.trash.value_objects.tombstone_key import TombstoneKey


class RestoreStatus(str, Enum):
    RESTORED = "restored"  # Record recreated, tombstone may go
    FAILED = "failed"  # Nothing written, tombstone stays
    PARTIAL = "partial"  # Ledger left inconsistent, tombstone stays


@dataclass(frozen=True)
class RestoreResult:
    """What happened when a tombstone was replayed into the ledger."""

    key: TombstoneKey
    status: RestoreStatus
    restored_id: Optional[str] = None
    error: Optional[DomainException] = None

    @classmethod
    def restored(cls, key: TombstoneKey, restored_id: str) -> RestoreResult:
        return cls(key=key, status=RestoreStatus.RESTORED, restored_id=restored_id)

    @classmethod
    def failed(cls, key: TombstoneKey, error: DomainException) -> RestoreResult:
        return cls(key=key, status=RestoreStatus.FAILED, error=error)

    @classmethod
    def partial(
        cls,
        key: TombstoneKey,
        parent_id: str,
        error: DomainException,
    ) -> RestoreResult:
        return cls(
            key=key,
            status=RestoreStatus.PARTIAL,
            restored_id=parent_id,
            error=error,
        )

    @property
    def is_restored(self) -> bool:
        return self.status is RestoreStatus.RESTORED

    @property
    def is_partial(self) -> bool:
        return self.status is RestoreStatus.PARTIAL

    @property
    def keeps_tombstone(self) -> bool:
        return not self.is_restored
