"""Port to the authoritative ledger, the system of record for live data."""

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any, Optional

from spendwise.domain.trash.value_objects import EntityKind


class AuthoritativeStore(ABC):
    """
    Narrow view of the ledger that the trash needs.

    Every call is its own unit of work: there is no transaction spanning two
    calls. Implementations raise ``AuthoritativeStoreError`` when a call is
    rejected and ``TimeoutError`` when it does not answer in time.
    """

    @abstractmethod
    async def create(self, kind: EntityKind, record: Mapping[str, Any]) -> str:
        """Insert one row and return the id the ledger assigned to it."""

    @abstractmethod
    async def create_many(
        self,
        kind: EntityKind,
        records: Sequence[Mapping[str, Any]],
    ) -> None:
        """
        Insert the child rows of a composite kind in one write.

        For ``EntityKind.SPLIT_BILL`` the records are participant rows,
        each carrying ``split_bill_id``. Either all rows are written or none.
        """

    @abstractmethod
    async def find(self, kind: EntityKind, record_id: str) -> Optional[dict[str, Any]]:
        """Return a live record (composites embed their child rows) or None."""

    @abstractmethod
    async def delete(self, kind: EntityKind, record_id: str) -> bool:
        """Delete a live record; return False if it did not exist."""
