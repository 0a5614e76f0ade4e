"""Tombstone entity: a deleted record waiting to be restored or purged."""

from __future__ import annotations

from datetime import datetime, timedelta

from spendwise.domain.shared.time import days_until, ensure_tz_aware
from spendwise.domain.trash.value_objects import (
    EntityKind,
    TombstoneKey,
    TombstonePayload,
)


class Tombstone:
    """
    Snapshot of a deleted record plus the moment it was deleted.

    Tombstones are never changed after creation. Deleting the same record
    again produces a new tombstone that replaces this one.
    """

    def __init__(self, payload: TombstonePayload, deleted_at: datetime):
        self._key = TombstoneKey(kind=payload.kind, original_id=payload.id)
        self._payload = payload
        self._deleted_at = ensure_tz_aware(deleted_at)

    @property
    def key(self) -> TombstoneKey:
        return self._key

    @property
    def kind(self) -> EntityKind:
        return self._key.kind

    @property
    def original_id(self) -> str:
        return self._key.original_id

    @property
    def payload(self) -> TombstonePayload:
        return self._payload

    @property
    def deleted_at(self) -> datetime:
        return self._deleted_at

    @property
    def summary(self) -> str:
        return self._payload.summary

    def expires_at(self, retention_days: int) -> datetime:
        return self._deleted_at + timedelta(days=retention_days)

    def is_expired(self, now: datetime, retention_days: int) -> bool:
        return self.expires_at(retention_days) <= ensure_tz_aware(now)

    def days_remaining(self, now: datetime, retention_days: int) -> int:
        return days_until(self.expires_at(retention_days), now)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Tombstone):
            return False
        return self._key == other._key and self._deleted_at == other._deleted_at

    def __hash__(self) -> int:
        return hash((self._key, self._deleted_at))

    def __repr__(self) -> str:
        return f"Tombstone({self._key}, deleted_at={self._deleted_at.isoformat()})"
