"""Shared enums for models."""

from enum import Enum


class UserRole(str, Enum):
    """Application-wide role."""

    USER = "user"
    ADMIN = "admin"


class TeamRole(str, Enum):
    """Role of a member inside a team."""

    OWNER = "owner"
    MEMBER = "member"


class TeamVisibility(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"


class TaskStatus(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
