"""User entity and its persistent record."""

from datetime import datetime

from sqlmodel import Field, SQLModel

from src.taskboard.models.base import new_id, utc_now
from src.taskboard.models.enums import UserRole


class User(SQLModel):
    """Backing-agnostic user entity. `password_hash` never leaves the service layer."""

    id: str = Field(default_factory=new_id)
    email: str
    password_hash: str
    name: str
    avatar_url: str | None = None
    role: UserRole = UserRole.USER
    is_active: bool = True
    last_login: datetime | None = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class UserStats(SQLModel):
    """Admin dashboard aggregate."""

    total_users: int = 0
    active_users: int = 0
    inactive_users: int = 0
    admin_users: int = 0
    regular_users: int = 0


class UserRecord(SQLModel, table=True):
    __tablename__ = "users"

    id: str = Field(primary_key=True, max_length=64)
    email: str = Field(max_length=255, unique=True, index=True)
    password_hash: str = Field(max_length=255)
    name: str = Field(max_length=100)
    avatar_url: str | None = Field(default=None, max_length=500)
    role: str = Field(default=UserRole.USER.value, max_length=20, index=True)
    is_active: bool = Field(default=True)
    last_login: datetime | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
