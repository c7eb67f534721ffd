from datetime import datetime

from pydantic import Field

from src.taskboard.core.security import MAX_PASSWORD_LENGTH, MIN_PASSWORD_LENGTH
from src.taskboard.models import UserRole, UserStats
from src.taskboard.schemas.base import APIModel, CredentialsModel, NormalizedEmail


class UserProfile(APIModel):
    """What a user sees about themselves."""

    id: str
    email: str
    name: str
    avatar_url: str | None = None
    role: UserRole
    is_active: bool
    last_login: datetime | None = None


class PublicUser(APIModel):
    """Directory entry other users can see."""

    id: str
    email: str
    name: str
    avatar_url: str | None = None
    role: UserRole


class ProfileUpdate(APIModel):
    name: str | None = Field(None, max_length=100)
    role: UserRole | None = None


class ProfileUpdateResponse(APIModel):
    user: UserProfile
    token: str


class AvatarResponse(APIModel):
    ok: bool = True
    user: UserProfile
    token: str


class PasswordChangeRequest(APIModel):
    # Presence and length are checked by the service for its exact messages
    current_password: str | None = None
    new_password: str | None = Field(None, max_length=MAX_PASSWORD_LENGTH)


class AdminUserRead(APIModel):
    id: str
    email: str
    name: str
    role: UserRole
    is_active: bool
    last_login: datetime | None = None
    created_at: datetime


class AdminUserCreate(CredentialsModel):
    email: NormalizedEmail
    password: str = Field(min_length=MIN_PASSWORD_LENGTH, max_length=MAX_PASSWORD_LENGTH)
    name: str | None = Field(None, max_length=100)
    role: UserRole = UserRole.USER
    is_active: bool = True


class AdminUserUpdate(APIModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    role: UserRole | None = None
    is_active: bool | None = None


class UserStatsRead(APIModel):
    total_users: int
    active_users: int
    inactive_users: int
    admin_users: int
    regular_users: int
    last_updated: datetime

    @classmethod
    def from_stats(cls, stats: UserStats, last_updated: datetime) -> "UserStatsRead":
        return cls(**stats.model_dump(), last_updated=last_updated)
