"""Model exports.

Entities are backing-agnostic; `*Record` classes are the SQL tables of the
persistent backing. Import from here: `from src.taskboard.models import User, Team`
"""

from src.taskboard.models.base import new_id, utc_now
from src.taskboard.models.board import Board, BoardMemberRecord, BoardRecord
from src.taskboard.models.enums import (
    TaskPriority,
    TaskStatus,
    TeamRole,
    TeamVisibility,
    UserRole,
)
from src.taskboard.models.message import Message, MessageRecord
from src.taskboard.models.principal import Principal
from src.taskboard.models.task import Attachment, Comment, SubTask, Task, TaskRecord
from src.taskboard.models.team import (
    Team,
    TeamMember,
    TeamMemberRecord,
    TeamRecord,
    TeamSettings,
)
from src.taskboard.models.user import User, UserRecord, UserStats

__all__ = [
    # Helpers
    "new_id",
    "utc_now",
    # Enums
    "TaskPriority",
    "TaskStatus",
    "TeamRole",
    "TeamVisibility",
    "UserRole",
    # Entities
    "Attachment",
    "Board",
    "Comment",
    "Message",
    "Principal",
    "SubTask",
    "Task",
    "Team",
    "TeamMember",
    "TeamSettings",
    "User",
    "UserStats",
    # Records
    "BoardMemberRecord",
    "BoardRecord",
    "MessageRecord",
    "TaskRecord",
    "TeamMemberRecord",
    "TeamRecord",
    "UserRecord",
]
