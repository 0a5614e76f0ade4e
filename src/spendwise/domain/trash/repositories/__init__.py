"""Trash repository interfaces."""

from spendwise.domain.trash.repositories.tombstone_partition_repository import (
    TombstonePartitionRepository,
)

__all__ = ["TombstonePartitionRepository"]
