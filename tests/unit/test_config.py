"""Tests for settings validation."""

import pytest
from pydantic import ValidationError

from src.taskboard.core.config import Settings

pytestmark = pytest.mark.unit

VALID_SECRET = "a" * 32


def make_settings(**overrides) -> Settings:
    values = {"jwt_secret_key": VALID_SECRET, "app_env": "development", "storage_mode": "auto"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestJwtSecret:
    def test_placeholder_secret_rejected(self):
        with pytest.raises(ValidationError, match="must be changed from default"):
            make_settings(jwt_secret_key="change-this-to-a-secure-random-string")

    def test_short_secret_rejected(self):
        with pytest.raises(ValidationError, match="at least 32 characters"):
            make_settings(jwt_secret_key="too-short")

    def test_long_secret_accepted(self):
        assert make_settings().jwt_secret_key == VALID_SECRET


class TestCors:
    def test_wildcard_rejected(self):
        with pytest.raises(ValidationError, match="wildcard"):
            make_settings(cors_origins=["*"])


class TestStorageSettings:
    def test_production_requires_database_url(self):
        with pytest.raises(ValidationError, match="DATABASE_URL is required"):
            make_settings(app_env="production", database_url=None)

    def test_production_forbids_volatile_mode(self):
        with pytest.raises(ValidationError, match="STORAGE_MODE=volatile"):
            make_settings(
                app_env="production",
                database_url="postgresql+asyncpg://u:p@db/taskboard",
                storage_mode="volatile",
            )

    def test_persistent_enabled_needs_url_and_auto_mode(self):
        assert not make_settings(database_url=None).persistent_enabled
        assert make_settings(database_url="sqlite+aiosqlite://").persistent_enabled
        assert not make_settings(
            database_url="sqlite+aiosqlite://", storage_mode="volatile"
        ).persistent_enabled

    def test_upload_limits_default(self):
        settings = make_settings()
        assert settings.avatar_max_bytes == 5 * 1024 * 1024
        assert settings.attachment_max_bytes == 10 * 1024 * 1024
        assert settings.access_token_expire_days == 7
