"""Trash domain: tombstones of deleted records, purge and restore."""

from spendwise.domain.trash.entities import Tombstone
from spendwise.domain.trash.value_objects import EntityKind, TombstoneKey

__all__ = ["EntityKind", "Tombstone", "TombstoneKey"]
