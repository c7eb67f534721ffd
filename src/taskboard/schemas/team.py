from datetime import datetime

from pydantic import Field

from src.taskboard.models import TeamRole, TeamVisibility
from src.taskboard.schemas.base import APIModel


class TeamSettingsSchema(APIModel):
    allow_member_invites: bool = True
    allow_task_creation: bool = True
    allow_task_assignment: bool = True
    max_members: int = Field(10, ge=1, le=1000)
    visibility: TeamVisibility = TeamVisibility.PUBLIC


class TeamMemberRead(APIModel):
    user_id: str
    email: str
    name: str
    role: TeamRole
    is_active: bool


class TeamRead(APIModel):
    id: str
    name: str
    description: str
    settings: TeamSettingsSchema
    members: list[TeamMemberRead]
    created_at: datetime
    updated_at: datetime


class TeamCreate(APIModel):
    # Emptiness is checked by the service for its exact message
    name: str | None = Field(None, max_length=200)
    description: str = Field("", max_length=2000)
    settings: TeamSettingsSchema | None = None


class TeamResponse(APIModel):
    ok: bool = True
    team: TeamRead


class TeamJoinResponse(APIModel):
    ok: bool = True
    message: str | None = None
    team: TeamRead
