"""SQLAlchemy model for shared-expense groups."""

from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from spendwise.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)


class GroupModel(Base, TimestampMixin):
    """Database model for groups."""

    __tablename__ = "groups"

    __table_args__ = (
        CheckConstraint("length(trim(name)) > 0", name="check_group_name_not_blank"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    invite_code: Mapped[str | None] = mapped_column(String(32), nullable=True)
    created_by: Mapped[str | None] = mapped_column(String(64), nullable=True)
