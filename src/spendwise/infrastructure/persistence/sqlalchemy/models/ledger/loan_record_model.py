"""SQLAlchemy model for loan records."""

import datetime as dt
from decimal import Decimal
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, Date, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from spendwise.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)


class LoanRecordModel(Base, TimestampMixin):
    """Database model for money lent or borrowed."""

    __tablename__ = "loan_records"

    __table_args__ = (
        CheckConstraint(
            "direction IN ('lent', 'borrowed')",
            name="check_loan_direction",
        ),
        CheckConstraint(
            "length(trim(person_name)) > 0",
            name="check_loan_person_not_blank",
        ),
        CheckConstraint("amount >= 0", name="check_loan_amount_non_negative"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)

    direction: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        comment="lent or borrowed",
    )
    person_name: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    due_date: Mapped[dt.date | None] = mapped_column(Date, nullable=True)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="pending")
