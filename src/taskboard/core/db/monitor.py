"""Reachability tracking for the persistent backing."""

import asyncio
import contextlib
from collections.abc import Callable

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlmodel import SQLModel

import src.taskboard.models  # noqa: F401 - registers the record tables on SQLModel.metadata
from src.taskboard.core.logging import get_logger

logger = get_logger(__name__)


class ConnectionMonitor:
    """Answers "is the persistent backend reachable right now".

    `is_connected` is read on every repository call. It turns False as soon
    as a query hits a connection failure and turns True again after a
    successful probe. The schema is created on the first successful probe.
    """

    def __init__(self, engine: AsyncEngine, probe_interval: float = 15.0):
        self._engine = engine
        self._probe_interval = probe_interval
        self._connected = False
        self._schema_ready = False
        self._task: asyncio.Task[None] | None = None
        self._reconnect_callbacks: list[Callable[[], None]] = []

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @property
    def is_connected(self) -> bool:
        return self._connected

    def on_reconnect(self, callback: Callable[[], None]) -> None:
        """Run `callback` whenever the backend becomes reachable again."""
        self._reconnect_callbacks.append(callback)

    async def probe(self) -> bool:
        try:
            async with self._engine.begin() as conn:
                await conn.execute(text("SELECT 1"))
                if not self._schema_ready:
                    await conn.run_sync(SQLModel.metadata.create_all)
        except (SQLAlchemyError, OSError) as e:
            self.mark_unavailable(e)
            return False

        self._schema_ready = True
        if not self._connected:
            self._connected = True
            logger.info("Persistent storage reachable", backend=self._engine.url.get_backend_name())
            for callback in self._reconnect_callbacks:
                callback()
        return True

    def mark_unavailable(self, error: BaseException) -> None:
        if self._connected:
            logger.warning(
                "Persistent storage unreachable, serving from volatile backing",
                error=str(error),
            )
        self._connected = False

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._probe_interval)
            try:
                await self.probe()
            except Exception as e:
                # The loop is the only way back to the persistent backing
                logger.exception("Storage probe failed unexpectedly")
                self.mark_unavailable(e)

    def start(self) -> None:
        if self._task is None:
            self._task = asyncio.create_task(self._run(), name="storage-probe")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
