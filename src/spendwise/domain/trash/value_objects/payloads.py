"""Snapshots of deleted records, one immutable model per entity kind.

A payload carries every field needed to recreate its record in the ledger.
Identity is the id the record had when it was deleted; the ledger assigns a
new id on restore.
"""

import datetime as dt
from abc import abstractmethod
from decimal import Decimal
from enum import Enum
from typing import Any, ClassVar

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from spendwise.domain.trash.value_objects.entity_kind import EntityKind


def _format_amount(amount: Decimal) -> str:
    return f"{amount:.2f}"


class TombstonePayload(BaseModel):
    """Base for all payloads: frozen, tolerant of unknown ledger columns."""

    kind: ClassVar[EntityKind]

    id: str = Field(..., min_length=1, description="Id at deletion time")

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        extra="ignore",
    )

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v: Any) -> Any:
        # Ledger rows carry UUIDs, old browser entries carry strings
        if v is None or isinstance(v, str):
            return v
        return str(v)

    @property
    @abstractmethod
    def summary(self) -> str:
        """One line describing the record in the trash listing."""

    @abstractmethod
    def to_record(self) -> dict[str, Any]:
        """Ledger row fields for recreating the record (no identity)."""


def _date_only(v: Any) -> Any:
    # Timestamps such as "2024-03-01T00:00:00Z" are accepted as their date
    if isinstance(v, str) and "T" in v:
        return v.split("T", 1)[0]
    if isinstance(v, dt.datetime):
        return v.date()
    return v


class ExpensePayload(TombstonePayload):
    """A single spending entry."""

    kind: ClassVar[EntityKind] = EntityKind.EXPENSE

    description: str = Field(..., min_length=1)
    amount: Decimal = Field(..., ge=0)
    date: dt.date | None = None
    category_id: str | None = None
    category_name: str | None = None
    bill_url: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _flatten_category(cls, data: Any) -> Any:
        # Older entries embed the joined category as {"categories": {...}}
        if isinstance(data, dict) and isinstance(data.get("categories"), dict):
            category = data["categories"]
            data = {
                **data,
                "category_id": data.get("category_id") or category.get("id"),
                "category_name": data.get("category_name") or category.get("name"),
            }
        return data

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, v: Any) -> Any:
        return _date_only(v)

    @field_validator("category_id", mode="before")
    @classmethod
    def _coerce_category_id(cls, v: Any) -> Any:
        return v if v is None or isinstance(v, str) else str(v)

    @property
    def summary(self) -> str:
        parts = [self.description, _format_amount(self.amount)]
        if self.category_name:
            parts.append(self.category_name)
        return " · ".join(parts)

    def to_record(self) -> dict[str, Any]:
        return {
            "description": self.description,
            "amount": self.amount,
            "date": self.date,
            "category_id": self.category_id,
            "category_name": self.category_name,
            "bill_url": self.bill_url,
        }


class LoanDirection(str, Enum):
    """Whether the user lent the money or borrowed it."""

    LENT = "lent"
    BORROWED = "borrowed"


class LoanRecordPayload(TombstonePayload):
    """Money lent to or borrowed from a person."""

    kind: ClassVar[EntityKind] = EntityKind.LOAN_RECORD

    direction: LoanDirection
    person_name: str = Field(..., min_length=1)
    amount: Decimal = Field(..., ge=0)
    description: str | None = None
    due_date: dt.date | None = None
    status: str = "pending"

    @field_validator("due_date", mode="before")
    @classmethod
    def _parse_due_date(cls, v: Any) -> Any:
        return _date_only(v)

    @property
    def summary(self) -> str:
        if self.direction is LoanDirection.LENT:
            head = f"Lent to {self.person_name}"
        else:
            head = f"Borrowed from {self.person_name}"
        return f"{head} · {_format_amount(self.amount)}"

    def to_record(self) -> dict[str, Any]:
        return {
            "direction": self.direction.value,
            "person_name": self.person_name,
            "amount": self.amount,
            "description": self.description,
            "due_date": self.due_date,
            "status": self.status,
        }


class SplitParticipantPayload(BaseModel):
    """One person's share of a split bill."""

    name: str = Field(..., min_length=1)
    amount: Decimal = Field(..., ge=0)
    is_paid: bool = False

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        extra="ignore",
    )


class SplitBillPayload(TombstonePayload):
    """A bill together with its participant rows."""

    kind: ClassVar[EntityKind] = EntityKind.SPLIT_BILL

    title: str = Field(..., min_length=1)
    total_amount: Decimal = Field(
        ...,
        ge=0,
        validation_alias=AliasChoices("total_amount", "total"),
    )
    participants: tuple[SplitParticipantPayload, ...] = Field(
        default=(),
        validation_alias=AliasChoices("participants", "split_bill_participants"),
    )

    @field_validator("participants", mode="before")
    @classmethod
    def _none_means_no_participants(cls, v: Any) -> Any:
        return () if v is None else v

    @property
    def summary(self) -> str:
        count = len(self.participants)
        people = "person" if count == 1 else "people"
        return f"{self.title} · {_format_amount(self.total_amount)} · {count} {people}"

    def to_record(self) -> dict[str, Any]:
        return self.bill_record()

    def bill_record(self) -> dict[str, Any]:
        return {"title": self.title, "total_amount": self.total_amount}

    def participant_records(self, bill_id: str) -> list[dict[str, Any]]:
        return [
            {
                "split_bill_id": bill_id,
                "name": participant.name,
                "amount": participant.amount,
                "is_paid": participant.is_paid,
            }
            for participant in self.participants
        ]


class GroupPayload(TombstonePayload):
    """A shared-expense group."""

    kind: ClassVar[EntityKind] = EntityKind.GROUP

    name: str = Field(..., min_length=1)
    description: str | None = None
    invite_code: str | None = None
    created_by: str | None = None

    @field_validator("created_by", mode="before")
    @classmethod
    def _coerce_created_by(cls, v: Any) -> Any:
        return v if v is None or isinstance(v, str) else str(v)

    @property
    def summary(self) -> str:
        if self.description:
            return f"{self.name} · {self.description}"
        return self.name

    def to_record(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "invite_code": self.invite_code,
            "created_by": self.created_by,
        }
