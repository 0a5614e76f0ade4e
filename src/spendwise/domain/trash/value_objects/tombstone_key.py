"""Composite identity of a tombstone."""

from __future__ import annotations

from dataclasses import dataclass

from spendwise.domain.trash.exceptions import InvalidTombstoneKeyError
from spendwise.domain.trash.value_objects.entity_kind import EntityKind

KEY_SEPARATOR = ":"


@dataclass(frozen=True)
class TombstoneKey:
    """Key of a tombstone: the record's kind plus its original id.

    The kind is part of the key, so an expense and a group sharing an id
    are different tombstones.
    """

    kind: EntityKind
    original_id: str

    def __post_init__(self) -> None:
        if not self.original_id:
            raise InvalidTombstoneKeyError(str(self), "original id is empty")

    @classmethod
    def parse(cls, raw: str) -> TombstoneKey:
        """Parse ``"<kind>:<id>"``; only the first separator splits."""
        kind_value, separator, original_id = raw.partition(KEY_SEPARATOR)
        if not separator:
            raise InvalidTombstoneKeyError(raw, "expected '<kind>:<id>'")
        try:
            kind = EntityKind(kind_value)
        except ValueError:
            raise InvalidTombstoneKeyError(
                raw, f"unknown kind '{kind_value}'"
            ) from None
        return cls(kind=kind, original_id=original_id)

    def __str__(self) -> str:
        return f"{self.kind.value}{KEY_SEPARATOR}{self.original_id}"
