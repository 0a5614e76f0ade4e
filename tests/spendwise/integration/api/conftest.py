"""Pytest fixtures for API integration tests.

Each test gets its own SQLite ledger file and trash directory under
``tmp_path``. Seeding runs in a fresh event loop before the TestClient
starts its own.
"""

from decimal import Decimal
from typing import Any, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from spendwise.application.ports.identity import CurrentUser
from spendwise.domain.trash.value_objects import EntityKind
from spendwise.infrastructure.persistence.sqlalchemy.adapters.ledger import (
    SQLAlchemyLedgerStore,
)
from spendwise.infrastructure.persistence.sqlalchemy.init_db import create_tables
from spendwise.presentation.api.app import API_V1_PREFIX, create_app
from spendwise_config.settings import Settings
from tests.shared.fixtures import TEST_USER_ID, TestUserFactory, run_in_fresh_loop


@pytest.fixture
def api_v1_prefix() -> str:
    """Get the API v1 prefix for building URLs."""
    return API_V1_PREFIX


@pytest.fixture
def api_settings(tmp_path) -> Settings:
    """Test settings pointing at per-test storage."""
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}",
        trash_data_dir=tmp_path / "trash",
        trash_retention_days=30,
        api_debug=True,
        log_level="WARNING",
    )


@pytest.fixture
def seed_ledger(api_settings):
    """Insert a live record for a user and return its ledger id."""

    def _seed(
        kind: EntityKind,
        record: dict[str, Any],
        participants: Optional[list[dict[str, Any]]] = None,
        user: Optional[CurrentUser] = None,
    ) -> str:
        async def _insert() -> str:
            engine = create_async_engine(api_settings.database_url)
            try:
                await create_tables(engine)
                store = SQLAlchemyLedgerStore(
                    async_sessionmaker(engine, class_=AsyncSession),
                    user or TestUserFactory.default_current_user(),
                )
                record_id = await store.create(kind, record)
                if participants:
                    await store.create_many(
                        kind,
                        [{**row, "split_bill_id": record_id} for row in participants],
                    )
                return record_id
            finally:
                await engine.dispose()

        return run_in_fresh_loop(_insert())

    return _seed


@pytest.fixture
def coffee_id(seed_ledger) -> str:
    return seed_ledger(
        EntityKind.EXPENSE,
        {"description": "Coffee", "amount": Decimal("4.5")},
    )


@pytest.fixture
def dinner_id(seed_ledger) -> str:
    return seed_ledger(
        EntityKind.SPLIT_BILL,
        {"title": "Dinner", "total_amount": Decimal("60")},
        participants=[
            {"name": "Ana", "amount": Decimal("30")},
            {"name": "Ben", "amount": Decimal("30")},
        ],
    )


@pytest.fixture
def app(api_settings):
    return create_app(settings=api_settings)


@pytest.fixture
def test_client(app):
    """Test client with the app lifespan running (tables created)."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"X-User-Id": str(TEST_USER_ID)}
