"""Per-kind translation between ledger records, payloads and stored entries.

Stored entry layout (one dict per tombstone inside a kind's partition)::

    {"schema_version": 1, "id": "...", "deleted_at": "<ISO-8601>",
     "payload": {...}}

Entries written by the old browser client are plain records with a
``deleted_at`` field mixed in; ``split_envelope`` accepts both.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import ValidationError as PydanticValidationError

from spendwise.domain.shared.time import ensure_tz_aware
from spendwise.domain.trash.exceptions import (
    RecordSnapshotError,
    TombstoneDecodeError,
)
from spendwise.domain.trash.value_objects import (
    EntityKind,
    ExpensePayload,
    GroupPayload,
    LoanRecordPayload,
    SplitBillPayload,
    TombstonePayload,
    ensure_total,
)

SCHEMA_VERSION = 1

P = TypeVar("P", bound=TombstonePayload)


def _describe(error: PydanticValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or "payload"
    return f"{location}: {first['msg']}"


class EntityCodec(Generic[P]):
    """Encode, decode and dump payloads of one entity kind."""

    def __init__(self, payload_type: type[P]):
        self._payload_type = payload_type

    @property
    def kind(self) -> EntityKind:
        return self._payload_type.kind

    def encode(self, record: Mapping[str, Any]) -> P:
        """Snapshot a live ledger record (which is known to exist)."""
        try:
            return self._payload_type.model_validate(dict(record))
        except PydanticValidationError as e:
            raw_id = record.get("id")
            raise RecordSnapshotError(
                self.kind,
                _describe(e),
                record_id=None if raw_id is None else str(raw_id),
            ) from e

    def decode(self, raw: Any) -> P:
        """Validate a stored payload before it is trusted."""
        if not isinstance(raw, Mapping):
            raise TombstoneDecodeError(
                self.kind,
                f"expected an object, got {type(raw).__name__}",
            )
        try:
            return self._payload_type.model_validate(dict(raw))
        except PydanticValidationError as e:
            raise TombstoneDecodeError(
                self.kind,
                _describe(e),
                raw_id=raw.get("id"),
            ) from e

    def dump(self, payload: P) -> dict[str, Any]:
        return payload.model_dump(mode="json")


class ExpenseCodec(EntityCodec[ExpensePayload]):
    def __init__(self):
        super().__init__(ExpensePayload)


class LoanRecordCodec(EntityCodec[LoanRecordPayload]):
    def __init__(self):
        super().__init__(LoanRecordPayload)


class SplitBillCodec(EntityCodec[SplitBillPayload]):
    def __init__(self):
        super().__init__(SplitBillPayload)

    def encode(self, record: Mapping[str, Any]) -> SplitBillPayload:
        # Participant rows arrive as ORM-style dicts with their own ids
        data = dict(record)
        participants = data.get("participants", data.get("split_bill_participants"))
        if participants is not None:
            data["participants"] = [dict(row) for row in participants]
            data.pop("split_bill_participants", None)
        return super().encode(data)


class GroupCodec(EntityCodec[GroupPayload]):
    def __init__(self):
        super().__init__(GroupPayload)


CODECS: dict[EntityKind, EntityCodec] = ensure_total(
    {
        EntityKind.EXPENSE: ExpenseCodec(),
        EntityKind.LOAN_RECORD: LoanRecordCodec(),
        EntityKind.SPLIT_BILL: SplitBillCodec(),
        EntityKind.GROUP: GroupCodec(),
    },
    "codec",
)


def codec_for(kind: EntityKind) -> EntityCodec:
    return CODECS[kind]


def build_entry(payload: TombstonePayload, deleted_at: datetime) -> dict[str, Any]:
    """Stored form of one tombstone."""
    return {
        "schema_version": SCHEMA_VERSION,
        "id": payload.id,
        "deleted_at": ensure_tz_aware(deleted_at).isoformat(),
        "payload": codec_for(payload.kind).dump(payload),
    }


def entry_id(entry: Any) -> str | None:
    """Original id of a stored entry, or None if it has none."""
    if not isinstance(entry, Mapping):
        return None
    raw_id = entry.get("id")
    if raw_id is None and isinstance(entry.get("payload"), Mapping):
        raw_id = entry["payload"].get("id")
    return None if raw_id is None else str(raw_id)


def split_envelope(kind: EntityKind, entry: Any) -> tuple[Any, datetime]:
    """Return ``(raw payload, deleted_at)`` of a stored entry."""
    if not isinstance(entry, Mapping):
        raise TombstoneDecodeError(
            kind,
            f"expected an object, got {type(entry).__name__}",
        )

    if "payload" in entry:
        raw_payload = entry["payload"]
    else:
        raw_payload = {k: v for k, v in entry.items() if k != "deleted_at"}

    raw_deleted_at = entry.get("deleted_at")
    if not isinstance(raw_deleted_at, str) or not raw_deleted_at:
        raise TombstoneDecodeError(kind, "missing deleted_at", raw_id=entry.get("id"))
    try:
        deleted_at = datetime.fromisoformat(raw_deleted_at.replace("Z", "+00:00"))
    except ValueError:
        raise TombstoneDecodeError(
            kind,
            f"malformed deleted_at '{raw_deleted_at}'",
            raw_id=entry.get("id"),
        ) from None

    return raw_payload, ensure_tz_aware(deleted_at)
