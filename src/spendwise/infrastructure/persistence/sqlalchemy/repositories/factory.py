"""Repository factory wiring the trash to its two media for one user."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from spendwise.infrastructure.persistence.json import (
    JsonFileTombstonePartitionRepository,
)
from spendwise.infrastructure.persistence.sqlalchemy.adapters.ledger import (
    SQLAlchemyLedgerStore,
)

if TYPE_CHECKING:
    from spendwise.application.ports.identity import CurrentUser

logger = logging.getLogger(__name__)


class SQLAlchemyRepositoryFactory:
    """Implementation of the RepositoryFactory Protocol.

    The ledger lives in the SQLAlchemy database; tombstones live in JSON
    files under ``trash_data_dir``.
    """

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        current_user: CurrentUser,
        trash_data_dir: Path,
        ledger_timeout: float | None = None,
    ):
        self._session_maker = session_maker
        self._current_user = current_user
        self._trash_data_dir = trash_data_dir
        self._ledger_timeout = ledger_timeout

        # Cached instances (created on demand)
        self._partition_repo: JsonFileTombstonePartitionRepository | None = None
        self._ledger_store: SQLAlchemyLedgerStore | None = None

    @property
    def current_user(self) -> CurrentUser:
        return self._current_user

    def tombstone_partition_repository(self) -> JsonFileTombstonePartitionRepository:
        if self._partition_repo is None:
            self._partition_repo = JsonFileTombstonePartitionRepository(
                self._trash_data_dir,
                self._current_user,
            )
        return self._partition_repo

    def authoritative_store(self) -> SQLAlchemyLedgerStore:
        if self._ledger_store is None:
            self._ledger_store = SQLAlchemyLedgerStore(
                self._session_maker,
                self._current_user,
                timeout=self._ledger_timeout,
            )
        return self._ledger_store
