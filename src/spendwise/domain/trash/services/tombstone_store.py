"""Durable keyed collection of tombstones, partitioned by entity kind.

The store keeps no copy of its own: every read goes to the partition
repository, so what it returns never runs ahead of what was persisted.
Read-modify-write cycles of one kind are serialized with a per-kind lock;
different kinds never wait on each other.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable, Mapping
from datetime import datetime
from typing import Any, Optional

from spendwise.domain.shared.time import utc_now
from spendwise.domain.trash.entities import Tombstone
from spendwise.domain.trash.exceptions import (
    TombstoneDecodeError,
    TombstoneStoreError,
)
from spendwise.domain.trash.repositories import TombstonePartitionRepository
from spendwise.domain.trash.services.entity_codec import (
    build_entry,
    codec_for,
    entry_id,
    split_envelope,
)
from spendwise.domain.trash.value_objects import (
    EntityKind,
    TombstoneKey,
    TombstonePayload,
)

logger = logging.getLogger(__name__)


class TombstoneStore:
    """List, add and remove tombstones on top of a partition repository."""

    def __init__(
        self,
        repository: TombstonePartitionRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._repository = repository
        self._clock = clock
        self._locks: dict[EntityKind, asyncio.Lock] = {
            kind: asyncio.Lock() for kind in EntityKind
        }

    async def list(self, kind: EntityKind) -> list[Tombstone]:
        """Decoded tombstones of one kind in store order.

        Entries that fail to decode are logged and left out.
        """
        entries = await self._repository.read_partition(kind)
        tombstones = []
        for position, entry in enumerate(entries):
            try:
                tombstones.append(self._decode(kind, entry))
            except TombstoneDecodeError as e:
                logger.warning(
                    "Skipping unreadable %s tombstone at position %d: %s",
                    kind.value,
                    position,
                    e.message,
                )
        return tombstones

    async def list_all(self) -> list[Tombstone]:
        """Tombstones of every kind, kinds in declaration order."""
        tombstones: list[Tombstone] = []
        for kind in EntityKind:
            tombstones.extend(await self.list(kind))
        return tombstones

    async def get(self, key: TombstoneKey) -> Optional[Tombstone]:
        for tombstone in await self.list(key.kind):
            if tombstone.key == key:
                return tombstone
        return None

    async def check_readable(self, kind: EntityKind) -> None:
        """Raise ``TombstoneStoreError`` if the kind's partition cannot be read."""
        await self._repository.read_partition(kind)

    async def add(self, kind: EntityKind, payload: TombstonePayload) -> Tombstone:
        """Insert or replace the tombstone for ``(kind, payload.id)``.

        A replaced tombstone moves to the end of the insertion order and gets
        a fresh ``deleted_at``. Returns only after the write is durable.
        """
        if payload.kind is not kind:
            msg = f"{type(payload).__name__} cannot be stored as {kind.value}"
            raise TypeError(msg)

        tombstone = Tombstone(payload=payload, deleted_at=self._clock())
        async with self._locks[kind]:
            entries = await self._repository.read_partition(kind)
            kept = [entry for entry in entries if entry_id(entry) != payload.id]
            kept.append(build_entry(payload, tombstone.deleted_at))
            await self._repository.write_partition(kind, kept)

        if len(kept) == len(entries):
            logger.info("Replaced tombstone %s", tombstone.key)
        else:
            logger.info("Added tombstone %s", tombstone.key)
        return tombstone

    async def add_record(
        self,
        kind: EntityKind,
        record: Mapping[str, Any],
    ) -> Tombstone:
        """Snapshot a live ledger record and add it."""
        return await self.add(kind, codec_for(kind).encode(record))

    async def remove(self, kind: EntityKind, original_id: str) -> bool:
        """Remove one tombstone; absent keys are a no-op returning False."""
        removed = await self._remove_from_partition(kind, {original_id})
        return removed > 0

    async def remove_many(self, keys: Iterable[TombstoneKey]) -> int:
        """Remove several tombstones with one write per affected kind.

        Every kind is attempted even if an earlier one fails; failed kinds
        keep their previous content and are reported together afterwards.
        """
        ids_by_kind: dict[EntityKind, set[str]] = {}
        for key in keys:
            ids_by_kind.setdefault(key.kind, set()).add(key.original_id)

        removed = 0
        failures: list[TombstoneStoreError] = []
        for kind in EntityKind:
            if kind not in ids_by_kind:
                continue
            try:
                removed += await self._remove_from_partition(kind, ids_by_kind[kind])
            except TombstoneStoreError as e:
                logger.warning("Could not remove %s tombstones: %s", kind.value, e)
                failures.append(e)

        if failures:
            failed_kinds = [kind for error in failures for kind in error.kinds]
            msg = "Could not update trash for: " + ", ".join(
                kind.value for kind in failed_kinds
            )
            raise TombstoneStoreError(
                msg,
                kinds=failed_kinds,
                details={"removed": removed},
            )
        return removed

    async def _remove_from_partition(
        self,
        kind: EntityKind,
        original_ids: set[str],
    ) -> int:
        async with self._locks[kind]:
            entries = await self._repository.read_partition(kind)
            kept = [entry for entry in entries if entry_id(entry) not in original_ids]
            removed = len(entries) - len(kept)
            if removed:
                await self._repository.write_partition(kind, kept)
        return removed

    def _decode(self, kind: EntityKind, entry: Any) -> Tombstone:
        raw_payload, deleted_at = split_envelope(kind, entry)
        payload = codec_for(kind).decode(raw_payload)
        return Tombstone(payload=payload, deleted_at=deleted_at)
