"""Board entity, its record and the membership junction table."""

from datetime import datetime
from typing import Any

from pydantic import field_validator
from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from src.taskboard.models.base import new_id, utc_now


class Board(SQLModel):
    """A shared board; `data` is an opaque client document."""

    id: str = Field(default_factory=new_id)
    title: str = "Untitled Board"
    owner_id: str
    members: list[str] = Field(default_factory=list)
    data: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @field_validator("members")
    @classmethod
    def unique_members(cls, v: list[str]) -> list[str]:
        return list(dict.fromkeys(v))

    def is_accessible_by(self, user_id: str) -> bool:
        return self.owner_id == user_id or user_id in self.members


class BoardRecord(SQLModel, table=True):
    __tablename__ = "boards"

    id: str = Field(primary_key=True, max_length=64)
    title: str = Field(max_length=200)
    owner_id: str = Field(max_length=64, index=True)
    data: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class BoardMemberRecord(SQLModel, table=True):
    """Junction table for board sharing."""

    __tablename__ = "board_members"

    board_id: str = Field(foreign_key="boards.id", primary_key=True, max_length=64)
    user_id: str = Field(primary_key=True, max_length=64, index=True)
    created_at: datetime = Field(default_factory=utc_now)
