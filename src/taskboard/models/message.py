"""Direct message entity and record."""

from datetime import datetime

from sqlmodel import Field, SQLModel

from src.taskboard.models.base import new_id, utc_now


class Message(SQLModel):
    id: str = Field(default_factory=new_id)
    sender_id: str
    recipient_id: str
    body: str
    read_at: datetime | None = None
    created_at: datetime = Field(default_factory=utc_now)


class MessageRecord(SQLModel, table=True):
    __tablename__ = "messages"

    id: str = Field(primary_key=True, max_length=64)
    sender_id: str = Field(max_length=64, index=True)
    recipient_id: str = Field(max_length=64, index=True)
    body: str
    read_at: datetime | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now, index=True)
