"""Tests for TombstoneStore on top of an in-memory partition repository."""

import asyncio
from datetime import timedelta

import pytest

from spendwise.domain.trash.exceptions import TombstoneStoreError
from spendwise.domain.trash.services import TombstoneStore, codec_for
from spendwise.domain.trash.value_objects import EntityKind, TombstoneKey
from tests.shared.fixtures import (
    expense_record,
    group_record,
    loan_record,
    split_bill_record,
)

E1 = TombstoneKey(EntityKind.EXPENSE, "e1")


class TestAddAndList:
    async def test_add_then_list_returns_tombstone(self, tombstone_store, clock):
        tombstone = await tombstone_store.add_record(
            EntityKind.EXPENSE,
            expense_record(),
        )

        listed = await tombstone_store.list(EntityKind.EXPENSE)

        assert listed == [tombstone]
        assert tombstone.key == E1
        assert tombstone.deleted_at == clock.now

    async def test_add_persists_before_returning(self, tombstone_store, partition_repo):
        await tombstone_store.add_record(EntityKind.EXPENSE, expense_record())
        assert partition_repo.writes == [EntityKind.EXPENSE]

    async def test_duplicate_add_keeps_latest_deleted_at(self, tombstone_store, clock):
        await tombstone_store.add_record(EntityKind.EXPENSE, expense_record())
        first_deleted_at = clock.now
        clock.advance(minutes=5)
        await tombstone_store.add_record(
            EntityKind.EXPENSE,
            expense_record(description="Espresso"),
        )

        listed = await tombstone_store.list(EntityKind.EXPENSE)

        assert len(listed) == 1
        assert listed[0].deleted_at == first_deleted_at + timedelta(minutes=5)
        assert listed[0].payload.description == "Espresso"

    async def test_replaced_tombstone_moves_to_end(self, tombstone_store):
        await tombstone_store.add_record(EntityKind.EXPENSE, expense_record("e1"))
        await tombstone_store.add_record(EntityKind.EXPENSE, expense_record("e2"))
        await tombstone_store.add_record(EntityKind.EXPENSE, expense_record("e1"))

        listed = await tombstone_store.list(EntityKind.EXPENSE)

        assert [t.original_id for t in listed] == ["e2", "e1"]

    async def test_add_rejects_payload_of_other_kind(self, tombstone_store):
        payload = codec_for(EntityKind.GROUP).encode(group_record())
        with pytest.raises(TypeError):
            await tombstone_store.add(EntityKind.EXPENSE, payload)

    async def test_list_all_merges_kinds_in_declaration_order(self, tombstone_store):
        await tombstone_store.add_record(EntityKind.GROUP, group_record())
        await tombstone_store.add_record(EntityKind.SPLIT_BILL, split_bill_record())
        await tombstone_store.add_record(EntityKind.EXPENSE, expense_record())
        await tombstone_store.add_record(EntityKind.LOAN_RECORD, loan_record())

        listed = await tombstone_store.list_all()

        assert [t.kind for t in listed] == list(EntityKind)

    async def test_check_readable_surfaces_medium_errors(
        self,
        tombstone_store,
        partition_repo,
    ):
        await tombstone_store.check_readable(EntityKind.GROUP)

        partition_repo.unreadable_kinds = {EntityKind.GROUP}
        with pytest.raises(TombstoneStoreError) as exc_info:
            await tombstone_store.check_readable(EntityKind.GROUP)
        assert exc_info.value.kinds == [EntityKind.GROUP]

    async def test_get_finds_by_key(self, tombstone_store):
        await tombstone_store.add_record(EntityKind.EXPENSE, expense_record())

        assert (await tombstone_store.get(E1)).summary == "Coffee · 4.50"
        assert await tombstone_store.get(TombstoneKey(EntityKind.GROUP, "e1")) is None


class TestUndecodableEntries:
    async def test_bad_entries_are_skipped_and_logged(
        self,
        tombstone_store,
        partition_repo,
        caplog,
    ):
        await tombstone_store.add_record(EntityKind.EXPENSE, expense_record())
        partition_repo.partitions[EntityKind.EXPENSE].extend(
            [
                "not an object",
                {"id": "e9", "deleted_at": "2024-03-01T10:00:00Z", "payload": {}},
            ],
        )

        with caplog.at_level("WARNING"):
            listed = await tombstone_store.list(EntityKind.EXPENSE)

        assert [t.key for t in listed] == [E1]
        assert caplog.text.count("Skipping unreadable expense tombstone") == 2

    async def test_legacy_flat_entries_are_listed(self, tombstone_store, partition_repo):
        partition_repo.partitions[EntityKind.EXPENSE] = [
            {**expense_record(), "deleted_at": "2024-02-01T08:00:00.000Z"},
        ]

        listed = await tombstone_store.list(EntityKind.EXPENSE)

        assert listed[0].key == E1
        assert listed[0].deleted_at.isoformat() == "2024-02-01T08:00:00+00:00"

    async def test_remove_drops_undecodable_entry_by_id(
        self,
        tombstone_store,
        partition_repo,
    ):
        partition_repo.partitions[EntityKind.EXPENSE] = [
            {"id": "e1", "deleted_at": "broken", "payload": {}},
        ]

        assert await tombstone_store.remove(EntityKind.EXPENSE, "e1") is True
        assert partition_repo.partitions[EntityKind.EXPENSE] == []


class TestRemove:
    async def test_removed_tombstone_is_never_listed(self, tombstone_store):
        await tombstone_store.add_record(EntityKind.EXPENSE, expense_record())

        assert await tombstone_store.remove(EntityKind.EXPENSE, "e1") is True
        assert await tombstone_store.list(EntityKind.EXPENSE) == []

    async def test_remove_absent_is_noop(self, tombstone_store, partition_repo):
        assert await tombstone_store.remove(EntityKind.EXPENSE, "nope") is False
        assert partition_repo.writes == []

    async def test_remove_many_writes_once_per_kind(
        self,
        tombstone_store,
        partition_repo,
    ):
        await tombstone_store.add_record(EntityKind.EXPENSE, expense_record("e1"))
        await tombstone_store.add_record(EntityKind.EXPENSE, expense_record("e2"))
        await tombstone_store.add_record(EntityKind.GROUP, group_record())
        partition_repo.writes.clear()

        removed = await tombstone_store.remove_many(
            [
                TombstoneKey(EntityKind.EXPENSE, "e1"),
                TombstoneKey(EntityKind.EXPENSE, "e2"),
                TombstoneKey(EntityKind.GROUP, "g1"),
            ],
        )

        assert removed == 3
        assert partition_repo.writes == [EntityKind.EXPENSE, EntityKind.GROUP]
        assert await tombstone_store.list_all() == []

    async def test_remove_many_reports_failed_kinds_after_trying_all(
        self,
        tombstone_store,
        partition_repo,
    ):
        await tombstone_store.add_record(EntityKind.EXPENSE, expense_record())
        await tombstone_store.add_record(EntityKind.LOAN_RECORD, loan_record())
        await tombstone_store.add_record(EntityKind.GROUP, group_record())
        partition_repo.failing_kinds = {EntityKind.LOAN_RECORD}

        with pytest.raises(TombstoneStoreError) as exc_info:
            await tombstone_store.remove_many(
                [
                    TombstoneKey(EntityKind.EXPENSE, "e1"),
                    TombstoneKey(EntityKind.LOAN_RECORD, "l1"),
                    TombstoneKey(EntityKind.GROUP, "g1"),
                ],
            )

        assert exc_info.value.kinds == [EntityKind.LOAN_RECORD]
        assert exc_info.value.details["removed"] == 2
        remaining = await tombstone_store.list_all()
        assert [t.original_id for t in remaining] == ["l1"]


class TestConcurrency:
    async def test_concurrent_adds_of_one_kind_are_not_lost(self, partition_repo):
        class SlowRepository(type(partition_repo)):
            async def read_partition(self, kind):
                entries = await super().read_partition(kind)
                await asyncio.sleep(0)
                return entries

        store = TombstoneStore(SlowRepository())

        await asyncio.gather(
            *(
                store.add_record(EntityKind.EXPENSE, expense_record(f"e{n}"))
                for n in range(5)
            ),
        )

        assert len(await store.list(EntityKind.EXPENSE)) == 5
