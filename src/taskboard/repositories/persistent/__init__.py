from src.taskboard.repositories.persistent.board import SQLBoardRepository
from src.taskboard.repositories.persistent.message import SQLMessageRepository
from src.taskboard.repositories.persistent.task import SQLTaskRepository
from src.taskboard.repositories.persistent.team import SQLTeamRepository
from src.taskboard.repositories.persistent.user import SQLUserRepository

__all__ = [
    "SQLBoardRepository",
    "SQLMessageRepository",
    "SQLTaskRepository",
    "SQLTeamRepository",
    "SQLUserRepository",
]
