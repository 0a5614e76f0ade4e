"""Integration tests for the trash and records endpoints."""

from decimal import Decimal
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from spendwise.application.services import TrashFacade
from spendwise.domain.trash.exceptions import AuthoritativeStoreError
from spendwise.domain.trash.ports import AuthoritativeStore
from spendwise.domain.trash.services import RestoreOrchestrator, TombstoneStore
from spendwise.domain.trash.value_objects import EntityKind
from spendwise.presentation.api.app import create_app
from spendwise.presentation.api.dependencies import get_trash_facade
from tests.shared.fixtures import (
    TEST_USER_ID_2,
    InMemoryPartitionRepository,
    run_in_fresh_loop,
    split_bill_record,
)

pytestmark = pytest.mark.integration


def _trash(client: TestClient, prefix: str, headers: dict) -> dict:
    response = client.get(f"{prefix}/trash", headers=headers)
    assert response.status_code == 200
    return response.json()


def _move(client, prefix, headers, kind: str, record_id: str) -> dict:
    response = client.delete(f"{prefix}/records/{kind}/{record_id}", headers=headers)
    assert response.status_code == 200, response.text
    return response.json()


class TestHealthAndIdentity:
    def test_health(self, test_client):
        response = test_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_missing_user_header(self, test_client, api_v1_prefix):
        response = test_client.get(f"{api_v1_prefix}/trash")
        assert response.status_code == 401

    def test_malformed_user_header(self, test_client, api_v1_prefix):
        response = test_client.get(
            f"{api_v1_prefix}/trash",
            headers={"X-User-Id": "not-a-uuid"},
        )
        assert response.status_code == 400


class TestMoveToTrash:
    def test_expense_moves_to_trash(
        self,
        coffee_id,
        test_client,
        auth_headers,
        api_v1_prefix,
    ):
        moved = _move(test_client, api_v1_prefix, auth_headers, "expense", coffee_id)
        listing = _trash(test_client, api_v1_prefix, auth_headers)

        assert moved["key"] == f"expense:{coffee_id}"
        assert listing["count"] == 1
        [item] = listing["items"]
        assert item["summary"] == "Coffee · 4.50"
        assert item["days_remaining"] == 30
        assert item["last_error"] is None

    def test_unknown_record(self, test_client, auth_headers, api_v1_prefix):
        response = test_client.delete(
            f"{api_v1_prefix}/records/expense/00000000-0000-0000-0000-000000000009",
            headers=auth_headers,
        )

        assert response.status_code == 404
        assert response.json()["code"] == "RECORD_NOT_FOUND"

    def test_unknown_kind(self, test_client, auth_headers, api_v1_prefix):
        response = test_client.delete(
            f"{api_v1_prefix}/records/invoice/1",
            headers=auth_headers,
        )
        assert response.status_code == 422

    def test_other_users_do_not_see_the_tombstone(
        self,
        coffee_id,
        test_client,
        auth_headers,
        api_v1_prefix,
    ):
        _move(test_client, api_v1_prefix, auth_headers, "expense", coffee_id)

        listing = _trash(
            test_client,
            api_v1_prefix,
            {"X-User-Id": str(TEST_USER_ID_2)},
        )

        assert listing["count"] == 0


class TestRestore:
    def test_restore_expense(self, coffee_id, test_client, auth_headers, api_v1_prefix):
        key = _move(test_client, api_v1_prefix, auth_headers, "expense", coffee_id)[
            "key"
        ]

        response = test_client.post(
            f"{api_v1_prefix}/trash/{key}/restore",
            headers=auth_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "restored"
        assert body["restored_id"] != coffee_id
        assert _trash(test_client, api_v1_prefix, auth_headers)["count"] == 0

        # The restored record can be trashed again under its new id
        _move(test_client, api_v1_prefix, auth_headers, "expense", body["restored_id"])

    def test_restore_split_bill_with_participants(
        self,
        dinner_id,
        test_client,
        auth_headers,
        api_v1_prefix,
    ):
        moved = _move(test_client, api_v1_prefix, auth_headers, "split_bill", dinner_id)
        assert moved["summary"] == "Dinner · 60.00 · 2 people"

        response = test_client.post(
            f"{api_v1_prefix}/trash/{moved['key']}/restore",
            headers=auth_headers,
        )
        new_id = response.json()["restored_id"]
        again = _move(test_client, api_v1_prefix, auth_headers, "split_bill", new_id)

        assert again["summary"] == "Dinner · 60.00 · 2 people"

    def test_restore_unknown_key(self, test_client, auth_headers, api_v1_prefix):
        response = test_client.post(
            f"{api_v1_prefix}/trash/expense:nope/restore",
            headers=auth_headers,
        )

        assert response.status_code == 404
        assert response.json()["code"] == "TOMBSTONE_NOT_FOUND"

    def test_restore_malformed_key(self, test_client, auth_headers, api_v1_prefix):
        response = test_client.post(
            f"{api_v1_prefix}/trash/nonsense/restore",
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_TOMBSTONE_KEY"


class TestPartialRestore:
    @pytest.fixture
    def broken_ledger_facade(self):
        ledger = AsyncMock(spec=AuthoritativeStore)
        ledger.create.return_value = "b1-new"
        ledger.create_many.side_effect = AuthoritativeStoreError("batch rejected")
        store = TombstoneStore(InMemoryPartitionRepository())
        run_in_fresh_loop(store.add_record(EntityKind.SPLIT_BILL, split_bill_record()))
        return TrashFacade(store, RestoreOrchestrator(ledger))

    def test_partial_restore_is_409_with_details(
        self,
        app,
        broken_ledger_facade,
        auth_headers,
        api_v1_prefix,
    ):
        app.dependency_overrides[get_trash_facade] = lambda: broken_ledger_facade

        with TestClient(app) as client:
            response = client.post(
                f"{api_v1_prefix}/trash/split_bill:b1/restore",
                headers=auth_headers,
            )
            listing = _trash(client, api_v1_prefix, auth_headers)

        assert response.status_code == 409
        body = response.json()
        assert body["code"] == "PARTIAL_RESTORE"
        assert body["details"]["parent_id"] == "b1-new"
        assert body["details"]["pending_participants"] == 2

        [item] = listing["items"]
        assert item["last_error"]["is_partial"] is True


class TestSelectionAndPurge:
    @pytest.fixture
    def trashed_keys(self, seed_ledger, test_client, auth_headers, api_v1_prefix):
        keys = []
        for description in ("Coffee", "Lunch"):
            record_id = seed_ledger(
                EntityKind.EXPENSE,
                {"description": description, "amount": Decimal("5")},
            )
            keys.append(
                _move(test_client, api_v1_prefix, auth_headers, "expense", record_id)[
                    "key"
                ],
            )
        return keys

    def test_toggle_select_all_and_clear(
        self,
        trashed_keys,
        test_client,
        auth_headers,
        api_v1_prefix,
    ):
        toggled = test_client.post(
            f"{api_v1_prefix}/trash/selection/toggle",
            headers=auth_headers,
            json={"key": trashed_keys[0]},
        ).json()
        assert toggled["is_selected"] is True
        assert toggled["selected_keys"] == [trashed_keys[0]]
        assert toggled["all_selected"] is False

        selected = test_client.post(
            f"{api_v1_prefix}/trash/selection/all",
            headers=auth_headers,
        ).json()
        assert selected["all_selected"] is True
        assert sorted(selected["selected_keys"]) == sorted(trashed_keys)

        cleared = test_client.delete(
            f"{api_v1_prefix}/trash/selection",
            headers=auth_headers,
        ).json()
        assert cleared["selected_keys"] == []

    def test_toggle_unknown_key(self, test_client, auth_headers, api_v1_prefix):
        response = test_client.post(
            f"{api_v1_prefix}/trash/selection/toggle",
            headers=auth_headers,
            json={"key": "group:g1"},
        )
        assert response.status_code == 404

    def test_purge_selected(
        self,
        trashed_keys,
        test_client,
        auth_headers,
        api_v1_prefix,
    ):
        test_client.post(f"{api_v1_prefix}/trash/selection/all", headers=auth_headers)

        response = test_client.post(f"{api_v1_prefix}/trash/purge", headers=auth_headers)

        assert response.json() == {"purged": 2}
        listing = _trash(test_client, api_v1_prefix, auth_headers)
        assert listing["count"] == 0
        assert listing["selected_keys"] == []

    def test_purge_one(self, trashed_keys, test_client, auth_headers, api_v1_prefix):
        url = f"{api_v1_prefix}/trash/{trashed_keys[0]}"

        assert test_client.delete(url, headers=auth_headers).status_code == 204
        assert test_client.delete(url, headers=auth_headers).status_code == 404
        assert _trash(test_client, api_v1_prefix, auth_headers)["count"] == 1

    def test_purge_expired_keeps_recent(
        self,
        trashed_keys,
        test_client,
        auth_headers,
        api_v1_prefix,
    ):
        response = test_client.post(
            f"{api_v1_prefix}/trash/purge-expired",
            headers=auth_headers,
        )

        assert response.json() == {"purged": 0}
        assert _trash(test_client, api_v1_prefix, auth_headers)["count"] == 2


class TestSessionBound:
    def test_sessions_are_bounded(self, api_settings, api_v1_prefix):
        settings = api_settings.model_copy(update={"trash_max_sessions": 2})
        app = create_app(settings=settings)

        with TestClient(app) as client:
            for _ in range(5):
                _trash(client, api_v1_prefix, {"X-User-Id": str(uuid4())})

        assert len(app.state.trash_sessions) == 2
