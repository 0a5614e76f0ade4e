"""Repository interface for the local tombstone medium.

A partition holds the stored entries of one entity kind for the current
user. Implementations are user-scoped. Partitions are independent: writing
one must never touch another.
"""

from abc import ABC, abstractmethod
from typing import Any

from spendwise.domain.trash.value_objects import EntityKind


class TombstonePartitionRepository(ABC):
    """Read and replace whole per-kind partitions of stored entries."""

    @abstractmethod
    async def read_partition(self, kind: EntityKind) -> list[Any]:
        """
        Read every stored entry of a kind, in insertion order.

        Parameters
        ----------
        kind
            Partition to read

        Returns
        -------
        Raw entries (may be empty, entries are not validated)

        Raises
        ------
        TombstoneStoreError
            If the partition exists but cannot be read
        """

    @abstractmethod
    async def write_partition(self, kind: EntityKind, entries: list[Any]) -> None:
        """
        Replace a kind's partition; durable once this returns.

        Parameters
        ----------
        kind
            Partition to replace
        entries
            Complete new content, in insertion order

        Raises
        ------
        TombstoneStoreError
            If the medium rejects the write (the old content is kept)
        """
