"""SQLAlchemy repository wiring."""

from spendwise.infrastructure.persistence.sqlalchemy.repositories.factory import (
    SQLAlchemyRepositoryFactory,
)

__all__ = ["SQLAlchemyRepositoryFactory"]
