"""Fixtures shared by the spendwise tests."""

from unittest.mock import AsyncMock

import pytest

from spendwise.application.ports.identity import CurrentUser
from spendwise.domain.trash.ports import AuthoritativeStore
from spendwise.domain.trash.services import TombstoneStore
from tests.shared.fixtures import (
    FixedClock,
    InMemoryPartitionRepository,
    TestUserFactory,
)


@pytest.fixture
def current_user() -> CurrentUser:
    """Provide a CurrentUser for the default test user."""
    return TestUserFactory.default_current_user()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def partition_repo() -> InMemoryPartitionRepository:
    return InMemoryPartitionRepository()


@pytest.fixture
def tombstone_store(partition_repo, clock) -> TombstoneStore:
    return TombstoneStore(partition_repo, clock=clock)


@pytest.fixture
def ledger() -> AsyncMock:
    """Mock ledger; every port method is an AsyncMock."""
    store = AsyncMock(spec=AuthoritativeStore)
    store.create.return_value = "new-id"
    store.create_many.return_value = None
    store.find.return_value = None
    store.delete.return_value = True
    return store
