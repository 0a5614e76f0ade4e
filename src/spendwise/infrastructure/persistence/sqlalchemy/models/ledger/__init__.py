"""Ledger models - the live records the trash snapshots and restores."""

from spendwise.infrastructure.persistence.sqlalchemy.models.ledger.expense_model import (  # NOQA: E501
    ExpenseModel,
)
from spendwise.infrastructure.persistence.sqlalchemy.models.ledger.group_model import (  # NOQA: E501
    GroupModel,
)
from spendwise.infrastructure.persistence.sqlalchemy.models.ledger.loan_record_model import (  # NOQA: E501
    LoanRecordModel,
)
from spendwise.infrastructure.persistence.sqlalchemy.models.ledger.split_bill_model import (  # NOQA: E501
    SplitBillModel,
    SplitBillParticipantModel,
)

__all__ = [
    "ExpenseModel",
    "GroupModel",
    "LoanRecordModel",
    "SplitBillModel",
    "SplitBillParticipantModel",
]
