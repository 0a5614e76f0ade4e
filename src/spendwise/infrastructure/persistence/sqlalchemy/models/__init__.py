"""SQLAlchemy models for persistence layer."""

from spendwise.infrastructure.persistence.sqlalchemy.models.base import Base
from spendwise.infrastructure.persistence.sqlalchemy.models.ledger import (
    ExpenseModel,
    GroupModel,
    LoanRecordModel,
    SplitBillModel,
    SplitBillParticipantModel,
)

__all__ = [
    "Base",
    "ExpenseModel",
    "GroupModel",
    "LoanRecordModel",
    "SplitBillModel",
    "SplitBillParticipantModel",
]
