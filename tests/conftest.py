"""Root test fixtures shared across all test types.

Storage fixtures build fresh backings per test: the volatile backing and a
persistent backing over in-memory SQLite. HTTP fixtures live in
tests/integration/conftest.py.
"""

import os

# Set before any application import: settings and the password hasher are read at import time
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-0123456789abcdef-0123456789abcdef")
os.environ.setdefault("STORAGE_MODE", "volatile")
os.environ.setdefault("ARGON2_TIME_COST", "1")
os.environ.setdefault("ARGON2_MEMORY_COST", "1024")

# ruff: noqa: E402 - Imports must be after env var setup
from collections.abc import AsyncGenerator

import pytest

from src.taskboard.core.config import get_settings
from src.taskboard.realtime import LocalHub
from src.taskboard.repositories import PERSISTENT, VOLATILE, Repositories
from tests.utils.storage import sqlite_repositories

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


@pytest.fixture
def volatile_repos() -> Repositories:
    """Repositories with only the volatile backing."""
    return Repositories()


@pytest.fixture
async def sqlite_repos() -> AsyncGenerator[Repositories]:
    """Repositories whose persistent backing is a reachable in-memory SQLite database."""
    async with sqlite_repositories() as repositories:
        yield repositories


@pytest.fixture(params=[VOLATILE, PERSISTENT])
async def repos(request: pytest.FixtureRequest) -> AsyncGenerator[Repositories]:
    """Run the test once per backing.

    The backing-equivalence suite and the HTTP scenarios depend on this
    fixture so every behavior is checked against both stores.
    """
    if request.param == VOLATILE:
        yield Repositories()
        return
    async with sqlite_repositories() as repositories:
        yield repositories


@pytest.fixture
def hub() -> LocalHub:
    """In-process hub that records every published event."""
    return LocalHub()
