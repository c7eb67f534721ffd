from datetime import datetime

from pydantic import Field

from src.taskboard.models import TaskPriority, TaskStatus
from src.taskboard.schemas.base import APIModel


class SubTaskSchema(APIModel):
    id: str | None = None
    text: str = Field(min_length=1, max_length=500)
    completed: bool = False


class CommentRead(APIModel):
    id: str
    author_id: str
    text: str
    created_at: datetime


class AttachmentRead(APIModel):
    id: str
    name: str
    url: str
    type: str
    size: int


class TaskRead(APIModel):
    id: str
    team_id: str
    title: str
    description: str
    assigned_to: list[str]
    status: TaskStatus
    priority: TaskPriority
    completed: bool
    due_date: str | None = None
    sub_tasks: list[SubTaskSchema]
    comments: list[CommentRead]
    attachments: list[AttachmentRead]
    created_by: str
    created_at: datetime
    updated_at: datetime


class TaskCreate(APIModel):
    title: str = Field(min_length=1, max_length=500)
    description: str = Field("", max_length=10_000)
    assigned_to: list[str] = Field(default_factory=list)
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    completed: bool = False
    due_date: str | None = Field(None, max_length=40)
    sub_tasks: list[SubTaskSchema] = Field(default_factory=list)


class TaskUpdate(APIModel):
    """Partial update; only the fields sent are merged."""

    title: str | None = Field(None, min_length=1, max_length=500)
    description: str | None = Field(None, max_length=10_000)
    assigned_to: list[str] | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    completed: bool | None = None
    due_date: str | None = Field(None, max_length=40)
    sub_tasks: list[SubTaskSchema] | None = None


class CommentCreate(APIModel):
    text: str = Field(min_length=1, max_length=5000)
