"""Single entry point the UI uses for the trash.

One facade belongs to one user session. It owns that session's selection
and remembers which keys are being restored and which restores failed.
Restores of different keys may run concurrently; a second restore of a key
that is still restoring is rejected.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from spendwise.application.dtos.trash import (
    RestoreErrorDTO,
    TombstoneListItemDTO,
    TrashListingDTO,
)
from spendwise.domain.shared.exceptions import DomainException
from spendwise.domain.shared.time import utc_now
from spendwise.domain.trash.entities import Tombstone
from spendwise.domain.trash.exceptions import (
    RestoreInProgressError,
    TombstoneNotFoundError,
)
from spendwise.domain.trash.services import (
    RestoreOrchestrator,
    SelectionSet,
    TombstoneStore,
)
from spendwise.domain.trash.value_objects import RestoreResult, TombstoneKey

if TYPE_CHECKING:
    from spendwise.application.factories import RepositoryFactory

logger = logging.getLogger(__name__)

DEFAULT_RETENTION_DAYS = 30


class TrashFacade:
    """List, select, purge and restore tombstones for one user session."""

    def __init__(
        self,
        tombstone_store: TombstoneStore,
        orchestrator: RestoreOrchestrator,
        retention_days: int = DEFAULT_RETENTION_DAYS,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._store = tombstone_store
        self._orchestrator = orchestrator
        self._retention_days = retention_days
        self._clock = clock
        self._selection = SelectionSet()
        self._loaded: list[Tombstone] = []
        self._restoring: set[TombstoneKey] = set()
        self._errors: dict[TombstoneKey, DomainException] = {}
        self._purging = False

    @classmethod
    def from_factory(
        cls,
        factory: RepositoryFactory,
        retention_days: int = DEFAULT_RETENTION_DAYS,
    ) -> TrashFacade:
        return cls(
            tombstone_store=TombstoneStore(factory.tombstone_partition_repository()),
            orchestrator=RestoreOrchestrator(factory.authoritative_store()),
            retention_days=retention_days,
        )

    @property
    def tombstone_store(self) -> TombstoneStore:
        return self._store

    @property
    def retention_days(self) -> int:
        return self._retention_days

    @property
    def loaded_keys(self) -> list[TombstoneKey]:
        return [tombstone.key for tombstone in self._loaded]

    @property
    def selected_keys(self) -> frozenset[TombstoneKey]:
        return self._selection.keys

    @property
    def restoring_keys(self) -> frozenset[TombstoneKey]:
        return frozenset(self._restoring)

    @property
    def is_purging(self) -> bool:
        return self._purging

    @property
    def is_busy(self) -> bool:
        """True while a restore or purge of this session is running."""
        return self._purging or bool(self._restoring)

    @property
    def is_all_selected(self) -> bool:
        return self._selection.is_all_selected(self.loaded_keys)

    def last_error(self, key: TombstoneKey) -> Optional[DomainException]:
        return self._errors.get(key)

    # -------------------------------------------------------------------------
    # Listing
    # -------------------------------------------------------------------------

    async def refresh(self) -> list[Tombstone]:
        """Reload every kind, newest deletion first.

        Ties keep store order (kind declaration order, then insertion order).
        Selection entries and error notes for vanished keys are dropped.
        """
        tombstones = await self._store.list_all()
        tombstones.sort(key=lambda tombstone: tombstone.deleted_at, reverse=True)
        self._loaded = tombstones

        current = set(self.loaded_keys)
        stale = self._selection.retain(current)
        if stale:
            logger.debug("Dropped %d stale selection key(s)", len(stale))
        for key in [key for key in self._errors if key not in current]:
            del self._errors[key]
        return list(tombstones)

    async def list_tombstones(self) -> list[TombstoneListItemDTO]:
        await self.refresh()
        now = self._clock()
        return [self._to_item(tombstone, now) for tombstone in self._loaded]

    async def listing(self) -> TrashListingDTO:
        items = await self.list_tombstones()
        return TrashListingDTO(
            items=items,
            selected_keys=[str(key) for key in self._selection],
            all_selected=self.is_all_selected,
            retention_days=self._retention_days,
        )

    def _to_item(self, tombstone: Tombstone, now: datetime) -> TombstoneListItemDTO:
        error = self._errors.get(tombstone.key)
        return TombstoneListItemDTO(
            key=str(tombstone.key),
            kind=tombstone.kind.value,
            original_id=tombstone.original_id,
            summary=tombstone.summary,
            deleted_at=tombstone.deleted_at,
            days_remaining=tombstone.days_remaining(now, self._retention_days),
            is_selected=tombstone.key in self._selection,
            is_restoring=tombstone.key in self._restoring,
            last_error=RestoreErrorDTO.from_exception(error) if error else None,
        )

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    def toggle_select(self, key: TombstoneKey) -> bool:
        """Flip selection of a listed key; return True if now selected."""
        if key not in set(self.loaded_keys):
            raise TombstoneNotFoundError(key)
        return self._selection.toggle(key)

    def select_all(self) -> None:
        self._selection.select_all(self.loaded_keys)

    def clear_selection(self) -> None:
        self._selection.clear()

    # -------------------------------------------------------------------------
    # Purge
    # -------------------------------------------------------------------------

    async def purge_selected(self) -> int:
        """Permanently remove every selected tombstone.

        On failure the selection is kept so the user can retry.
        """
        keys = list(self._selection)
        if not keys:
            return 0

        self._purging = True
        try:
            removed = await self._store.remove_many(keys)
        finally:
            self._purging = False

        logger.info("Purged %d of %d selected tombstone(s)", removed, len(keys))
        self._selection.clear()
        await self.refresh()
        return removed

    async def purge(self, key: TombstoneKey) -> bool:
        """Permanently remove one tombstone; False if it was already gone."""
        removed = await self._store.remove(key.kind, key.original_id)
        if removed:
            logger.info("Purged tombstone %s", key)
        self._selection.discard(key)
        await self.refresh()
        return removed

    async def purge_expired(self, now: Optional[datetime] = None) -> int:
        """Permanently remove tombstones older than the retention period."""
        now = now or self._clock()
        expired = [
            tombstone.key
            for tombstone in await self._store.list_all()
            if tombstone.is_expired(now, self._retention_days)
        ]
        if not expired:
            return 0

        removed = await self._store.remove_many(expired)
        logger.info(
            "Purged %d tombstone(s) older than %d days",
            removed,
            self._retention_days,
        )
        await self.refresh()
        return removed

    # -------------------------------------------------------------------------
    # Restore
    # -------------------------------------------------------------------------

    async def restore(self, key: TombstoneKey) -> RestoreResult:
        """Write a tombstone back to the ledger.

        Only a complete restore removes the tombstone. Failed and partial
        restores keep it and note the error for the next listing.
        """
        if key in self._restoring:
            raise RestoreInProgressError(key)

        self._restoring.add(key)
        try:
            tombstone = await self._store.get(key)
            if tombstone is None:
                raise TombstoneNotFoundError(key)

            result = await self._orchestrator.restore(tombstone)
            if result.is_restored:
                await self._remove_restored(key, result)
            elif result.error is not None:
                self._errors[key] = result.error
        finally:
            self._restoring.discard(key)

        await self.refresh()
        return result

    async def _remove_restored(self, key: TombstoneKey, result: RestoreResult) -> None:
        try:
            await self._store.remove(key.kind, key.original_id)
        except DomainException:
            logger.error(
                "Restored %s as %s but could not remove its tombstone; "
                "restoring it again would duplicate the record",
                key,
                result.restored_id,
            )
            raise
        self._errors.pop(key, None)
        self._selection.discard(key)
