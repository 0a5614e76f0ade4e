"""Trash domain exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from spendwise.domain.shared.exceptions import (
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    ExternalServiceError,
    ValidationError,
)

if TYPE_CHECKING:
    from spendwise.domain.trash.value_objects import EntityKind, TombstoneKey


class InvalidTombstoneKeyError(ValidationError):
    """Raised when a tombstone key string cannot be parsed."""

    def __init__(self, raw_key: str, reason: str) -> None:
        super().__init__(
            message=f"Invalid trash key '{raw_key}': {reason}",
            code=ErrorCode.INVALID_TOMBSTONE_KEY,
            details={"key": raw_key},
        )


class TombstoneDecodeError(ValidationError):
    """Raised when a stored entry does not match its kind's payload shape.

    Never reaches the caller of a listing: the store logs and skips it.
    """

    def __init__(
        self,
        kind: EntityKind,
        reason: str,
        raw_id: Any = None,
    ) -> None:
        super().__init__(
            message=f"Cannot decode {kind.value} tombstone: {reason}",
            code=ErrorCode.TOMBSTONE_DECODE_FAILED,
            details={"kind": kind.value, "id": raw_id},
        )
        self.kind = kind


class RecordSnapshotError(ValidationError):
    """Raised when a live ledger record does not fit its kind's payload shape.

    The record is left in the ledger untouched.
    """

    def __init__(
        self,
        kind: EntityKind,
        reason: str,
        record_id: Any = None,
    ) -> None:
        super().__init__(
            message=f"Cannot move {kind.value} '{record_id}' to the trash: {reason}",
            code=ErrorCode.RECORD_SNAPSHOT_FAILED,
            details={"kind": kind.value, "id": record_id},
        )
        self.kind = kind


class TombstoneStoreError(ExternalServiceError):
    """Raised when the local tombstone medium cannot be read or written."""

    def __init__(
        self,
        message: str,
        kinds: list[EntityKind] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        failed_kinds = [kind.value for kind in kinds or []]
        super().__init__(
            message=message,
            code=ErrorCode.TOMBSTONE_STORE_FAILED,
            details={"kinds": failed_kinds, **(details or {})},
        )
        self.kinds = list(kinds or [])


class TombstoneNotFoundError(EntityNotFoundError):
    """Raised when no tombstone exists for a key."""

    def __init__(self, key: TombstoneKey) -> None:
        super().__init__(
            message=f"Nothing in the trash for '{key}'",
            code=ErrorCode.TOMBSTONE_NOT_FOUND,
            details={"key": str(key)},
        )
        self.key = key


class RecordNotFoundError(EntityNotFoundError):
    """Raised when a live record cannot be found in the ledger."""

    def __init__(self, kind: EntityKind, record_id: str) -> None:
        super().__init__(
            message=f"No {kind.value} with id '{record_id}'",
            code=ErrorCode.RECORD_NOT_FOUND,
            details={"kind": kind.value, "id": record_id},
        )


class AuthoritativeStoreError(ExternalServiceError):
    """Raised by ledger adapters when a read or write is rejected."""

    def __init__(
        self,
        message: str,
        kind: EntityKind | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.AUTHORITATIVE_STORE_FAILED,
            details={"kind": kind.value if kind else None, **(details or {})},
        )
        self.kind = kind


class RestoreFailedError(DomainException):
    """Raised when a restore wrote nothing; the tombstone is kept."""

    def __init__(self, key: TombstoneKey, reason: str) -> None:
        super().__init__(
            message=f"Could not restore '{key}': {reason}",
            code=ErrorCode.RESTORE_FAILED,
            details={"key": str(key), "reason": reason},
        )
        self.key = key
        self.reason = reason


class PartialRestoreError(DomainException):
    """Raised when a composite restore stopped after its first write.

    The parent row exists in the ledger without its child rows. Nothing is
    rolled back; ``parent_id`` is what a compensating action needs.
    """

    def __init__(
        self,
        key: TombstoneKey,
        parent_id: str,
        pending_children: int,
        reason: str,
    ) -> None:
        super().__init__(
            message=(
                f"'{key}' was only partly restored: parent {parent_id} exists "
                f"but {pending_children} participant row(s) could not be written"
            ),
            code=ErrorCode.PARTIAL_RESTORE,
            details={
                "key": str(key),
                "parent_id": parent_id,
                "pending_participants": pending_children,
                "reason": reason,
            },
        )
        self.key = key
        self.parent_id = parent_id
        self.pending_children = pending_children
        self.reason = reason


class RestoreInProgressError(ConflictError):
    """Raised when a restore is requested for a key that is already restoring."""

    def __init__(self, key: TombstoneKey) -> None:
        super().__init__(
            message=f"A restore of '{key}' is already running",
            code=ErrorCode.RESTORE_IN_PROGRESS,
            details={"key": str(key)},
        )
        self.key = key
