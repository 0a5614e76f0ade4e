"""Tests for Settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from spendwise_config import Settings, clear_settings_cache, get_settings


class TestSettings:
    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.trash_retention_days == 30
        assert settings.trash_max_sessions == 1024
        assert settings.trash_data_dir == Path("data/trash")
        assert settings.database_type == "sqlite"
        assert settings.cors_origins == []

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("TRASH_RETENTION_DAYS", "7")
        monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://u:p@db/spendwise")
        monkeypatch.setenv("API_CORS_ORIGINS", "http://a.test, http://b.test")

        settings = Settings(_env_file=None)

        assert settings.trash_retention_days == 7
        assert settings.database_type == "postgresql"
        assert settings.cors_origins == ["http://a.test", "http://b.test"]

    @pytest.mark.parametrize("field", ["trash_retention_days", "trash_max_sessions"])
    def test_limits_must_be_positive(self, field):
        with pytest.raises(ValidationError, match=field):
            Settings(_env_file=None, **{field: 0})

    def test_get_settings_is_cached_until_cleared(self):
        clear_settings_cache()
        first = get_settings()
        assert get_settings() is first

        clear_settings_cache()
        assert get_settings() is not first
        clear_settings_cache()
