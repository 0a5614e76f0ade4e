"""Tests for TombstoneKey and EntityKind."""

import pytest

from spendwise.domain.trash.exceptions import InvalidTombstoneKeyError
from spendwise.domain.trash.value_objects import EntityKind, TombstoneKey, ensure_total


class TestTombstoneKey:
    def test_str_joins_kind_and_id(self):
        key = TombstoneKey(EntityKind.SPLIT_BILL, "b1")
        assert str(key) == "split_bill:b1"

    def test_parse_round_trips_str(self):
        key = TombstoneKey(EntityKind.LOAN_RECORD, "l-42")
        assert TombstoneKey.parse(str(key)) == key

    def test_parse_splits_on_first_separator_only(self):
        key = TombstoneKey.parse("expense:2024:03:e1")
        assert key.kind is EntityKind.EXPENSE
        assert key.original_id == "2024:03:e1"

    def test_same_id_different_kind_is_different_key(self):
        assert TombstoneKey(EntityKind.EXPENSE, "x") != TombstoneKey(
            EntityKind.GROUP,
            "x",
        )

    @pytest.mark.parametrize(
        "raw",
        ["expense", "invoice:1", "expense:", ":e1"],
    )
    def test_parse_rejects_malformed_keys(self, raw):
        with pytest.raises(InvalidTombstoneKeyError) as exc_info:
            TombstoneKey.parse(raw)
        assert exc_info.value.code.value == "INVALID_TOMBSTONE_KEY"

    def test_keys_are_hashable(self):
        keys = {
            TombstoneKey(EntityKind.EXPENSE, "e1"),
            TombstoneKey.parse("expense:e1"),
        }
        assert len(keys) == 1


class TestEntityKind:
    def test_declaration_order(self):
        assert [kind.value for kind in EntityKind] == [
            "expense",
            "loan_record",
            "split_bill",
            "group",
        ]

    def test_only_split_bill_is_composite(self):
        assert [kind for kind in EntityKind if kind.is_composite] == [
            EntityKind.SPLIT_BILL,
        ]

    def test_ensure_total_rejects_partial_registry(self):
        with pytest.raises(TypeError, match="group"):
            ensure_total(
                {
                    EntityKind.EXPENSE: 1,
                    EntityKind.LOAN_RECORD: 2,
                    EntityKind.SPLIT_BILL: 3,
                },
                "thing",
            )
