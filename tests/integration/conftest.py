"""HTTP fixtures: the composed app over the per-test backing and hub."""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from src.taskboard.core.config import Settings, get_settings
from src.taskboard.main import create_app
from src.taskboard.realtime import LocalHub
from src.taskboard.repositories import Repositories


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Test settings with uploads written under a temporary directory."""
    return get_settings().model_copy(update={"upload_dir": str(tmp_path / "uploads")})


@pytest.fixture
def app(settings: Settings, repos: Repositories, hub: LocalHub) -> FastAPI:
    """App wired to the parametrized backing and the recording hub.

    The lifespan is not run by ASGITransport; storage fixtures have
    already probed the monitor.
    """
    return create_app(settings=settings, repositories=repos, hub=hub)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """HTTP client for API testing."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
