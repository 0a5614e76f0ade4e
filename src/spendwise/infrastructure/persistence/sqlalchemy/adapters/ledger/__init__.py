"""Ledger adapters - SQLAlchemy implementation of the AuthoritativeStore port."""

from spendwise.infrastructure.persistence.sqlalchemy.adapters.ledger.ledger_store_sqlalchemy import (  # NOQA: E501
    LEDGER_MODELS,
    SQLAlchemyLedgerStore,
)

__all__ = ["LEDGER_MODELS", "SQLAlchemyLedgerStore"]
