"""Repository factory protocol for application layer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from spendwise.domain.trash.ports import AuthoritativeStore
from spendwise.domain.trash.repositories import TombstonePartitionRepository

if TYPE_CHECKING:
    from spendwise.application.ports.identity import CurrentUser


class RepositoryFactory(Protocol):
    """Protocol for creating user-scoped stores."""

    @property
    def current_user(self) -> CurrentUser:
        """Get the current user for scoping."""
        ...

    def tombstone_partition_repository(self) -> TombstonePartitionRepository:
        """Get the local tombstone medium."""
        ...

    def authoritative_store(self) -> AuthoritativeStore:
        """Get the ledger the trash restores into."""
        ...
