"""SQLAlchemy model for expenses."""

import datetime as dt
from decimal import Decimal
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, Date, Index, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from spendwise.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)


class ExpenseModel(Base, TimestampMixin):
    """Database model for expenses."""

    __tablename__ = "expenses"

    __table_args__ = (
        CheckConstraint(
            "length(trim(description)) > 0",
            name="check_expense_description_not_blank",
        ),
        CheckConstraint("amount >= 0", name="check_expense_amount_non_negative"),
        Index("ix_expenses_user_date", "user_id", "date"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)

    description: Mapped[str] = mapped_column(Text, nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    date: Mapped[dt.date | None] = mapped_column(Date, nullable=True)

    # Categories live in another service; only the reference is kept here
    category_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    category_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    bill_url: Mapped[str | None] = mapped_column(Text, nullable=True)
