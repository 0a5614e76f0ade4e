"""Root pytest configuration.

Test Structure:
    tests/
    ├── spendwise/
    │   ├── unit/            # Fast, isolated tests (mocks, tmp_path media)
    │   └── integration/     # SQLite ledger and the HTTP API
    └── shared/              # Shared fixtures and utilities
"""

import pytest

from spendwise_config import clear_settings_cache


@pytest.fixture(scope="session", autouse=True)
def configure_app_settings():
    """Never let one test's cached settings leak into another."""
    clear_settings_cache()
    yield
    clear_settings_cache()
