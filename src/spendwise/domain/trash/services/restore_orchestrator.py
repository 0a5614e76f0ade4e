"""Replay tombstones into the authoritative ledger.

Single-row kinds need one ``create``. A split bill needs two writes that
share no transaction: the bill row first, then its participant rows pointing
at the bill's new id. If the second write fails the ledger holds a bill
without participants; that state is reported as ``PartialRestoreError`` and
left for the caller to resolve.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from spendwise.domain.trash.entities import Tombstone
from spendwise.domain.trash.exceptions import (
    AuthoritativeStoreError,
    PartialRestoreError,
    RestoreFailedError,
)
from spendwise.domain.trash.ports import AuthoritativeStore
from spendwise.domain.trash.value_objects import (
    EntityKind,
    RestoreResult,
    SplitBillPayload,
    ensure_total,
)

logger = logging.getLogger(__name__)


class RestoreStrategy(ABC):
    """How one entity kind is written back to the ledger."""

    @abstractmethod
    async def restore(self, store: AuthoritativeStore, tombstone: Tombstone) -> str:
        """
        Recreate the record and return its new ledger id.

        Raises
        ------
        AuthoritativeStoreError, TimeoutError
            If nothing was written
        PartialRestoreError
            If some rows were written and others were not
        """


class SingleRowRestore(RestoreStrategy):
    """Expenses, loan records and groups: one row, one write."""

    async def restore(self, store: AuthoritativeStore, tombstone: Tombstone) -> str:
        return await store.create(tombstone.kind, tombstone.payload.to_record())


class SplitBillRestore(RestoreStrategy):
    """Bill row first, then all participant rows in one batch."""

    async def restore(self, store: AuthoritativeStore, tombstone: Tombstone) -> str:
        payload = tombstone.payload
        if not isinstance(payload, SplitBillPayload):
            msg = f"Expected a split bill payload for {tombstone.key}"
            raise TypeError(msg)

        bill_id = await store.create(EntityKind.SPLIT_BILL, payload.bill_record())

        participants = payload.participant_records(bill_id)
        if not participants:
            return bill_id

        try:
            await store.create_many(EntityKind.SPLIT_BILL, participants)
        except (AuthoritativeStoreError, TimeoutError) as e:
            raise PartialRestoreError(
                key=tombstone.key,
                parent_id=bill_id,
                pending_children=len(participants),
                reason=str(e) or type(e).__name__,
            ) from e
        return bill_id


def default_strategies() -> dict[EntityKind, RestoreStrategy]:
    single_row = SingleRowRestore()
    return {
        EntityKind.EXPENSE: single_row,
        EntityKind.LOAN_RECORD: single_row,
        EntityKind.SPLIT_BILL: SplitBillRestore(),
        EntityKind.GROUP: single_row,
    }


class RestoreOrchestrator:
    """Pick the strategy for a tombstone's kind and report the outcome.

    The orchestrator only writes to the ledger. Removing the tombstone after
    a successful restore is up to the caller.
    """

    def __init__(
        self,
        authoritative_store: AuthoritativeStore,
        strategies: dict[EntityKind, RestoreStrategy] | None = None,
    ):
        self._store = authoritative_store
        self._strategies = ensure_total(
            strategies if strategies is not None else default_strategies(),
            "restore strategy",
        )

    async def restore(self, tombstone: Tombstone) -> RestoreResult:
        strategy = self._strategies[tombstone.kind]
        try:
            restored_id = await strategy.restore(self._store, tombstone)
        except PartialRestoreError as e:
            logger.error(
                "Partial restore of %s: parent %s written, %d participant row(s) "
                "missing (%s)",
                tombstone.key,
                e.parent_id,
                e.pending_children,
                e.reason,
            )
            return RestoreResult.partial(tombstone.key, e.parent_id, e)
        except AuthoritativeStoreError as e:
            logger.warning("Restore of %s rejected by ledger: %s", tombstone.key, e)
            return RestoreResult.failed(
                tombstone.key,
                RestoreFailedError(tombstone.key, e.message),
            )
        except TimeoutError:
            logger.warning("Restore of %s timed out", tombstone.key)
            return RestoreResult.failed(
                tombstone.key,
                RestoreFailedError(tombstone.key, "the ledger did not answer in time"),
            )

        logger.info("Restored %s as %s", tombstone.key, restored_id)
        return RestoreResult.restored(tombstone.key, restored_id)
