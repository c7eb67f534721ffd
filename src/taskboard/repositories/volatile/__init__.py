from src.taskboard.repositories.volatile.repositories import (
    MemoryBoardRepository,
    MemoryMessageRepository,
    MemoryTaskRepository,
    MemoryTeamRepository,
    MemoryUserRepository,
)

__all__ = [
    "MemoryBoardRepository",
    "MemoryMessageRepository",
    "MemoryTaskRepository",
    "MemoryTeamRepository",
    "MemoryUserRepository",
]
