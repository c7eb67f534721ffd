"""Task entity and record. Sub-documents live in JSON columns."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from src.taskboard.models.base import new_id, utc_now
from src.taskboard.models.enums import TaskPriority, TaskStatus


class SubTask(SQLModel):
    id: str = Field(default_factory=new_id)
    text: str
    completed: bool = False


class Comment(SQLModel):
    id: str = Field(default_factory=new_id)
    author_id: str
    text: str
    created_at: datetime = Field(default_factory=utc_now)


class Attachment(SQLModel):
    id: str = Field(default_factory=new_id)
    name: str
    url: str
    type: str
    size: int


class Task(SQLModel):
    id: str = Field(default_factory=new_id)
    team_id: str
    title: str
    description: str = ""
    assigned_to: list[str] = Field(default_factory=list)
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    completed: bool = False
    due_date: str | None = None
    sub_tasks: list[SubTask] = Field(default_factory=list)
    comments: list[Comment] = Field(default_factory=list)
    attachments: list[Attachment] = Field(default_factory=list)
    created_by: str
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class TaskRecord(SQLModel, table=True):
    __tablename__ = "tasks"

    id: str = Field(primary_key=True, max_length=64)
    team_id: str = Field(max_length=64, index=True)
    title: str = Field(max_length=500)
    description: str = Field(default="")
    assigned_to: list[Any] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    status: str = Field(default=TaskStatus.TODO.value, max_length=20)
    priority: str = Field(default=TaskPriority.MEDIUM.value, max_length=20)
    completed: bool = Field(default=False)
    due_date: str | None = Field(default=None, max_length=40)
    sub_tasks: list[Any] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    comments: list[Any] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    attachments: list[Any] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    created_by: str = Field(max_length=64)
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)
