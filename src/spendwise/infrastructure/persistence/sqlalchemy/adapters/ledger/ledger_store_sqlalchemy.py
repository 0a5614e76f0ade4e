"""SQLAlchemy implementation of the AuthoritativeStore port.

Each call opens its own session and commits it before returning, so two
calls never share a transaction. This is what makes a split bill restore a
two-step saga rather than one atomic write.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Mapping, Sequence
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from spendwise.domain.trash.exceptions import AuthoritativeStoreError
from spendwise.domain.trash.ports import AuthoritativeStore
from spendwise.domain.trash.value_objects import EntityKind, ensure_total
from spendwise.infrastructure.persistence.sqlalchemy.models import (
    Base,
    ExpenseModel,
    GroupModel,
    LoanRecordModel,
    SplitBillModel,
    SplitBillParticipantModel,
)

if TYPE_CHECKING:
    from spendwise.application.ports.identity import CurrentUser

logger = logging.getLogger(__name__)

LEDGER_MODELS: dict[EntityKind, type[Base]] = ensure_total(
    {
        EntityKind.EXPENSE: ExpenseModel,
        EntityKind.LOAN_RECORD: LoanRecordModel,
        EntityKind.SPLIT_BILL: SplitBillModel,
        EntityKind.GROUP: GroupModel,
    },
    "ledger model",
)

# Columns the caller never sets directly
_MANAGED_COLUMNS = frozenset({"id", "user_id", "created_at", "updated_at"})


def _parse_id(record_id: str) -> Optional[UUID]:
    try:
        return UUID(str(record_id))
    except ValueError:
        return None


def _columns(model: type[Base]) -> list[str]:
    return [column.key for column in model.__table__.columns]


def _row_values(model: type[Base], record: Mapping[str, Any]) -> dict[str, Any]:
    allowed = set(_columns(model)) - _MANAGED_COLUMNS
    return {key: value for key, value in record.items() if key in allowed}


def _to_record(row: Base) -> dict[str, Any]:
    record = {
        key: getattr(row, key) for key in _columns(type(row)) if key != "user_id"
    }
    record["id"] = str(record["id"])
    return record


class SQLAlchemyLedgerStore(AuthoritativeStore):
    """Ledger access for one user.

    This store is user-scoped - every row it reads, writes or deletes
    belongs to the current user passed at construction time.
    """

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        current_user: CurrentUser,
        timeout: float | None = None,
    ) -> None:
        self._session_maker = session_maker
        self._current_user = current_user
        self._timeout = timeout

    @property
    def _user_id(self) -> UUID:
        return self._current_user.user_id

    async def create(self, kind: EntityKind, record: Mapping[str, Any]) -> str:
        model = LEDGER_MODELS[kind]
        row = model(user_id=self._user_id, **_row_values(model, record))
        async with self._unit_of_work(kind, "create") as session:
            session.add(row)
            await session.flush()
            new_id = str(row.id)
        logger.debug("Created %s %s", kind.value, new_id)
        return new_id

    async def create_many(
        self,
        kind: EntityKind,
        records: Sequence[Mapping[str, Any]],
    ) -> None:
        if not kind.is_composite:
            msg = f"{kind.value} has no child rows"
            raise AuthoritativeStoreError(msg, kind=kind)
        if not records:
            return

        bill_ids = {_parse_id(record.get("split_bill_id")) for record in records}
        async with self._unit_of_work(kind, "create_many") as session:
            owned = await session.scalars(
                select(SplitBillModel.id).where(
                    SplitBillModel.id.in_([bid for bid in bill_ids if bid]),
                    SplitBillModel.user_id == self._user_id,
                ),
            )
            missing = bill_ids - set(owned.all())
            if missing:
                msg = "Participant rows reference an unknown split bill"
                raise AuthoritativeStoreError(
                    msg,
                    kind=kind,
                    details={"split_bill_ids": sorted(str(bid) for bid in missing)},
                )
            for record in records:
                values = _row_values(SplitBillParticipantModel, record)
                values["split_bill_id"] = _parse_id(record["split_bill_id"])
                session.add(SplitBillParticipantModel(**values))
        logger.debug("Created %d %s participant row(s)", len(records), kind.value)

    async def find(self, kind: EntityKind, record_id: str) -> Optional[dict[str, Any]]:
        row_id = _parse_id(record_id)
        if row_id is None:
            return None
        async with self._unit_of_work(kind, "find") as session:
            row = await self._load(session, kind, row_id)
            if row is None:
                return None
            record = _to_record(row)
            if isinstance(row, SplitBillModel):
                record["participants"] = [
                    _to_record(participant) for participant in row.participants
                ]
        return record

    async def delete(self, kind: EntityKind, record_id: str) -> bool:
        row_id = _parse_id(record_id)
        if row_id is None:
            return False
        async with self._unit_of_work(kind, "delete") as session:
            row = await self._load(session, kind, row_id)
            if row is None:
                return False
            await session.delete(row)
        logger.debug("Deleted %s %s", kind.value, record_id)
        return True

    async def _load(
        self,
        session: AsyncSession,
        kind: EntityKind,
        row_id: UUID,
    ) -> Optional[Base]:
        model = LEDGER_MODELS[kind]
        stmt = select(model).where(model.id == row_id, model.user_id == self._user_id)
        if model is SplitBillModel:
            stmt = stmt.options(selectinload(SplitBillModel.participants))
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @asynccontextmanager
    async def _unit_of_work(
        self,
        kind: EntityKind,
        operation: str,
    ) -> AsyncIterator[AsyncSession]:
        """One session, one transaction, committed on clean exit."""
        try:
            async with asyncio.timeout(self._timeout):
                async with self._session_maker() as session, session.begin():
                    yield session
        except TimeoutError:
            logger.warning("Ledger %s of %s timed out", operation, kind.value)
            raise
        except SQLAlchemyError as e:
            logger.warning("Ledger %s of %s failed: %s", operation, kind.value, e)
            msg = f"Ledger {operation} failed for {kind.value}"
            raise AuthoritativeStoreError(
                msg,
                kind=kind,
                details={"reason": str(e.__cause__ or e)},
            ) from e
