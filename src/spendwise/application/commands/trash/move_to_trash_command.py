"""Delete a ledger record and keep a tombstone of it."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Optional

from spendwise.domain.shared.exceptions import DomainException
from spendwise.domain.trash.entities import Tombstone
from spendwise.domain.trash.exceptions import RecordNotFoundError
from spendwise.domain.trash.ports import AuthoritativeStore
from spendwise.domain.trash.services import TombstoneStore, codec_for
from spendwise.domain.trash.value_objects import EntityKind

if TYPE_CHECKING:
    from spendwise.application.factories import RepositoryFactory

logger = logging.getLogger(__name__)


class MoveToTrashCommand:
    """Snapshot a live record, delete it from the ledger, then trash it."""

    def __init__(
        self,
        authoritative_store: AuthoritativeStore,
        tombstone_store: TombstoneStore,
    ):
        self._ledger = authoritative_store
        self._tombstones = tombstone_store

    @classmethod
    def from_factory(
        cls,
        factory: RepositoryFactory,
        tombstone_store: Optional[TombstoneStore] = None,
    ) -> MoveToTrashCommand:
        return cls(
            authoritative_store=factory.authoritative_store(),
            tombstone_store=tombstone_store
            or TombstoneStore(factory.tombstone_partition_repository()),
        )

    async def execute(self, kind: EntityKind, record_id: str) -> Tombstone:
        record = await self._ledger.find(kind, record_id)
        if record is None:
            raise RecordNotFoundError(kind, record_id)

        # Nothing is deleted unless the snapshot encodes and the partition reads
        codec = codec_for(kind)
        payload = codec.encode(record)
        await self._tombstones.check_readable(kind)

        if not await self._ledger.delete(kind, record_id):
            raise RecordNotFoundError(kind, record_id)

        try:
            return await self._tombstones.add(kind, payload)
        except DomainException:
            logger.error(
                "Deleted %s %s but could not write its tombstone; snapshot: %s",
                kind.value,
                record_id,
                json.dumps(codec.dump(payload), sort_keys=True),
            )
            raise
