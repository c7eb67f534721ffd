"""Team entity, its record and the ordered membership table."""

from datetime import datetime
from typing import Any

from pydantic import field_validator
from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from src.taskboard.models.base import utc_now
from src.taskboard.models.enums import TeamRole, TeamVisibility


class TeamSettings(SQLModel):
    allow_member_invites: bool = True
    allow_task_creation: bool = True
    allow_task_assignment: bool = True
    max_members: int = Field(default=10, ge=1)
    visibility: TeamVisibility = TeamVisibility.PUBLIC


class TeamMember(SQLModel):
    user_id: str
    email: str
    name: str
    role: TeamRole = TeamRole.MEMBER
    is_active: bool = True


class Team(SQLModel):
    # Team ids are assigned by the service (`team_<uuid>`)
    id: str
    name: str
    description: str = ""
    settings: TeamSettings = Field(default_factory=TeamSettings)
    members: list[TeamMember] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @field_validator("members")
    @classmethod
    def unique_members(cls, v: list[TeamMember]) -> list[TeamMember]:
        """Keep the first entry per user; later duplicates are dropped."""
        seen: set[str] = set()
        unique = []
        for member in v:
            if member.user_id not in seen:
                seen.add(member.user_id)
                unique.append(member)
        return unique

    def has_member(self, user_id: str) -> bool:
        return any(member.user_id == user_id for member in self.members)

    @property
    def is_full(self) -> bool:
        return len(self.members) >= self.settings.max_members


class TeamRecord(SQLModel, table=True):
    __tablename__ = "teams"

    id: str = Field(primary_key=True, max_length=64)
    name: str = Field(max_length=200)
    description: str = Field(default="")
    settings: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class TeamMemberRecord(SQLModel, table=True):
    """Junction table for team membership; `position` keeps join order."""

    __tablename__ = "team_members"

    team_id: str = Field(foreign_key="teams.id", primary_key=True, max_length=64)
    user_id: str = Field(primary_key=True, max_length=64, index=True)
    position: int = Field(default=0)
    email: str = Field(max_length=255)
    name: str = Field(max_length=100)
    role: str = Field(default=TeamRole.MEMBER.value, max_length=20)
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utc_now)
