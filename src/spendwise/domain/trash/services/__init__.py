"""Trash domain services."""

from spendwise.domain.trash.services.entity_codec import (
    CODECS,
    EntityCodec,
    codec_for,
)
from spendwise.domain.trash.services.restore_orchestrator import (
    RestoreOrchestrator,
    RestoreStrategy,
    SingleRowRestore,
    SplitBillRestore,
)
from spendwise.domain.trash.services.selection_set import SelectionSet
from spendwise.domain.trash.services.tombstone_store import TombstoneStore

__all__ = [
    "CODECS",
    "EntityCodec",
    "RestoreOrchestrator",
    "RestoreStrategy",
    "SelectionSet",
    "SingleRowRestore",
    "SplitBillRestore",
    "TombstoneStore",
    "codec_for",
]
