"""Entity kinds the trash understands."""

from enum import Enum


class EntityKind(Enum):
    """Closed set of record shapes that can be moved to the trash.

    Declaration order is the merge order when listing across kinds.
    """

    EXPENSE = "expense"
    LOAN_RECORD = "loan_record"  # Money lent to or borrowed from a person
    SPLIT_BILL = "split_bill"  # Bill plus participant rows
    GROUP = "group"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")

    @property
    def is_composite(self) -> bool:
        return self is EntityKind.SPLIT_BILL


def ensure_total(registry: dict, what: str) -> dict:
    """Fail fast if ``registry`` does not cover every EntityKind."""
    missing = [kind.value for kind in EntityKind if kind not in registry]
    if missing:
        msg = f"No {what} registered for: {', '.join(missing)}"
        raise TypeError(msg)
    return registry
