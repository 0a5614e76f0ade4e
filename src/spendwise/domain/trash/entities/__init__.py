"""Trash entities."""

from spendwise.domain.trash.entities.tombstone import Tombstone

__all__ = ["Tombstone"]
