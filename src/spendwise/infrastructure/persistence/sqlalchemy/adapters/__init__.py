"""SQLAlchemy adapters implementing domain ports."""

from spendwise.infrastructure.persistence.sqlalchemy.adapters.ledger import (
    SQLAlchemyLedgerStore,
)

__all__ = ["SQLAlchemyLedgerStore"]
