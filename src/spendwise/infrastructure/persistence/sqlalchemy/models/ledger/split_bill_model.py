"""SQLAlchemy models for split bills and their participants."""

from __future__ import annotations

from decimal import Decimal
from uuid import UUID, uuid4

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from spendwise.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)


class SplitBillModel(Base, TimestampMixin):
    """Database model for a bill shared between several people."""

    __tablename__ = "split_bills"

    __table_args__ = (
        CheckConstraint(
            "length(trim(title)) > 0",
            name="check_split_bill_title_not_blank",
        ),
        CheckConstraint(
            "total_amount >= 0",
            name="check_split_bill_total_non_negative",
        ),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    participants: Mapped[list[SplitBillParticipantModel]] = relationship(
        back_populates="split_bill",
        cascade="all, delete-orphan",
        order_by="SplitBillParticipantModel.created_at",
    )


class SplitBillParticipantModel(Base, TimestampMixin):
    """One person's share of a split bill."""

    __tablename__ = "split_bill_participants"

    __table_args__ = (
        CheckConstraint(
            "length(trim(name)) > 0",
            name="check_participant_name_not_blank",
        ),
        CheckConstraint(
            "amount >= 0",
            name="check_participant_amount_non_negative",
        ),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    split_bill_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("split_bills.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    is_paid: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    split_bill: Mapped[SplitBillModel] = relationship(back_populates="participants")
