"""Database engine construction for the persistent backing."""

from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from src.taskboard.core.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Build the async engine for `settings.database_url`.

    Postgres (asyncpg) gets a sized pool and a connect timeout so an
    unreachable server fails fast. SQLite (aiosqlite) in-memory databases
    share one connection.
    """
    if not settings.database_url:
        raise ValueError("DATABASE_URL is not configured")

    url = make_url(settings.database_url)
    kwargs: dict[str, Any] = {"pool_pre_ping": True}

    if url.get_backend_name() == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_size"] = settings.database_pool_size
        kwargs["max_overflow"] = settings.database_max_overflow
        kwargs["connect_args"] = {"timeout": settings.database_connect_timeout}

    return create_async_engine(url, **kwargs)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
