"""The single seam that picks a backing for every repository call."""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.taskboard.core.db import ConnectionMonitor
from src.taskboard.core.logging import get_logger
from src.taskboard.repositories.base import (
    BoardRepository,
    MessageRepository,
    TaskRepository,
    TeamRepository,
    UserRepository,
)
from src.taskboard.repositories.persistent import (
    SQLBoardRepository,
    SQLMessageRepository,
    SQLTaskRepository,
    SQLTeamRepository,
    SQLUserRepository,
)
from src.taskboard.repositories.volatile import (
    MemoryBoardRepository,
    MemoryMessageRepository,
    MemoryTaskRepository,
    MemoryTeamRepository,
    MemoryUserRepository,
)
from src.taskboard.repositories.volatile.base import MemoryRepository

logger = get_logger(__name__)

PERSISTENT = "persistent"
VOLATILE = "volatile"


@dataclass(frozen=True)
class Backing:
    """One complete set of repositories over a single store."""

    name: str
    users: UserRepository
    boards: BoardRepository
    tasks: TaskRepository
    teams: TeamRepository
    messages: MessageRepository

    @property
    def is_persistent(self) -> bool:
        return self.name == PERSISTENT

    def clear(self) -> int:
        """Empty a volatile backing. Returns the number of entities dropped."""
        dropped = 0
        for repo in (self.users, self.boards, self.tasks, self.teams, self.messages):
            if isinstance(repo, MemoryRepository):
                dropped += repo.clear()
        return dropped


def create_volatile_backing() -> Backing:
    return Backing(
        name=VOLATILE,
        users=MemoryUserRepository(),
        boards=MemoryBoardRepository(),
        tasks=MemoryTaskRepository(),
        teams=MemoryTeamRepository(),
        messages=MemoryMessageRepository(),
    )


def create_persistent_backing(
    session_factory: async_sessionmaker[AsyncSession],
    monitor: ConnectionMonitor | None = None,
) -> Backing:
    on_unavailable = monitor.mark_unavailable if monitor is not None else None
    return Backing(
        name=PERSISTENT,
        users=SQLUserRepository(session_factory, on_unavailable),
        boards=SQLBoardRepository(session_factory, on_unavailable),
        tasks=SQLTaskRepository(session_factory, on_unavailable),
        teams=SQLTeamRepository(session_factory, on_unavailable),
        messages=SQLMessageRepository(session_factory, on_unavailable),
    )


class Repositories:
    """Repository facade handed to services.

    Every attribute access re-evaluates which backing is live, so a request
    served while the database is down uses the volatile maps and the next
    one transparently returns to the database once a probe succeeds.
    Volatile writes are not migrated on reconnect; they are discarded.
    """

    def __init__(
        self,
        volatile: Backing | None = None,
        persistent: Backing | None = None,
        monitor: ConnectionMonitor | None = None,
    ):
        if persistent is not None and monitor is None:
            raise ValueError("A persistent backing needs a ConnectionMonitor")
        self.volatile = volatile or create_volatile_backing()
        self.persistent = persistent
        self.monitor = monitor
        if monitor is not None:
            monitor.on_reconnect(self._discard_volatile_writes)

    @property
    def backing(self) -> Backing:
        if self.persistent is not None and self.monitor is not None and self.monitor.is_connected:
            return self.persistent
        return self.volatile

    @property
    def is_persistent(self) -> bool:
        return self.backing.is_persistent

    @property
    def users(self) -> UserRepository:
        return self.backing.users

    @property
    def boards(self) -> BoardRepository:
        return self.backing.boards

    @property
    def tasks(self) -> TaskRepository:
        return self.backing.tasks

    @property
    def teams(self) -> TeamRepository:
        return self.backing.teams

    @property
    def messages(self) -> MessageRepository:
        return self.backing.messages

    def _discard_volatile_writes(self) -> None:
        dropped = self.volatile.clear()
        if dropped:
            logger.warning(
                "Discarding volatile writes made while persistent storage was unreachable",
                dropped=dropped,
            )
