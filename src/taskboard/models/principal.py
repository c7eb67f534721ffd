"""Resolved identity of an authenticated request."""

from dataclasses import dataclass

from src.taskboard.models.enums import UserRole
from src.taskboard.models.user import User


@dataclass(frozen=True)
class Principal:
    id: str
    email: str
    name: str
    role: UserRole
    avatar_url: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @classmethod
    def from_user(cls, user: User) -> "Principal":
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            role=user.role,
            avatar_url=user.avatar_url,
        )
