"""Keys picked for a bulk operation."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from spendwise.domain.trash.value_objects import TombstoneKey


class SelectionSet:
    """In-memory set of tombstone keys, never persisted."""

    def __init__(self, keys: Iterable[TombstoneKey] = ()):
        self._keys: set[TombstoneKey] = set(keys)

    @property
    def keys(self) -> frozenset[TombstoneKey]:
        return frozenset(self._keys)

    def toggle(self, key: TombstoneKey) -> bool:
        """Flip membership of ``key``; return True if it is now selected."""
        if key in self._keys:
            self._keys.discard(key)
            return False
        self._keys.add(key)
        return True

    def select_all(self, keys: Iterable[TombstoneKey]) -> None:
        self._keys = set(keys)

    def discard(self, key: TombstoneKey) -> None:
        self._keys.discard(key)

    def clear(self) -> None:
        self._keys.clear()

    def retain(self, keys: Iterable[TombstoneKey]) -> set[TombstoneKey]:
        """Drop keys not in ``keys``; return the dropped ones."""
        stale = self._keys.difference(keys)
        self._keys.difference_update(stale)
        return stale

    def is_all_selected(self, universe: Iterable[TombstoneKey]) -> bool:
        return bool(self._keys) and self._keys == set(universe)

    def __contains__(self, key: object) -> bool:
        return key in self._keys

    def __iter__(self) -> Iterator[TombstoneKey]:
        return iter(sorted(self._keys, key=str))

    def __len__(self) -> int:
        return len(self._keys)
