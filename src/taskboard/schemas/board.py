from datetime import datetime
from typing import Any

from pydantic import Field

from src.taskboard.models import Board
from src.taskboard.schemas.base import APIModel, EmailLookup


class BoardRead(APIModel):
    id: str
    title: str
    owner: str
    members: list[str]
    data: dict[str, Any]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, board: Board) -> "BoardRead":
        return cls(
            id=board.id,
            title=board.title,
            owner=board.owner_id,
            members=board.members,
            data=board.data,
            created_at=board.created_at,
            updated_at=board.updated_at,
        )


class BoardCreate(APIModel):
    title: str | None = Field(None, max_length=200)
    data: dict[str, Any] | None = None


class BoardUpdate(APIModel):
    title: str | None = Field(None, max_length=200)
    data: dict[str, Any] | None = None


class BoardShareRequest(APIModel):
    email: EmailLookup = Field(min_length=1, max_length=255)
