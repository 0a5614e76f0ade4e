"""Trash value objects."""

from spendwise.domain.trash.value_objects.entity_kind import EntityKind, ensure_total
from spendwise.domain.trash.value_objects.payloads import (
    ExpensePayload,
    GroupPayload,
    LoanDirection,
    LoanRecordPayload,
    SplitBillPayload,
    SplitParticipantPayload,
    TombstonePayload,
)
from spendwise.domain.trash.value_objects.restore_result import (
    RestoreResult,
    RestoreStatus,
)
from spendwise.domain.trash.value_objects.tombstone_key import TombstoneKey

__all__ = [
    "EntityKind",
    "ExpensePayload",
    "GroupPayload",
    "LoanDirection",
    "LoanRecordPayload",
    "RestoreResult",
    "RestoreStatus",
    "SplitBillPayload",
    "SplitParticipantPayload",
    "TombstoneKey",
    "TombstonePayload",
    "ensure_total",
]
