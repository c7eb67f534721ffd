"""Repository exports.

Import from here: `from src.taskboard.repositories import Repositories`
"""

from src.taskboard.repositories.base import (
    BaseRepository,
    BoardRepository,
    MessageRepository,
    TaskRepository,
    TeamRepository,
    UserRepository,
    apply_patch,
)
from src.taskboard.repositories.router import (
    PERSISTENT,
    VOLATILE,
    Backing,
    Repositories,
    create_persistent_backing,
    create_volatile_backing,
)

__all__ = [
    # Contract
    "BaseRepository",
    "BoardRepository",
    "MessageRepository",
    "TaskRepository",
    "TeamRepository",
    "UserRepository",
    "apply_patch",
    # Routing
    "PERSISTENT",
    "VOLATILE",
    "Backing",
    "Repositories",
    "create_persistent_backing",
    "create_volatile_backing",
]
