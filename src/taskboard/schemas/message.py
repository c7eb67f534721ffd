from datetime import datetime

from pydantic import Field

from src.taskboard.schemas.base import APIModel


class MessageRead(APIModel):
    id: str
    sender_id: str = Field(alias="from")
    recipient_id: str = Field(alias="to")
    body: str
    read_at: datetime | None = None
    created_at: datetime


class MessageCreate(APIModel):
    # Emptiness is checked by the service for its exact message
    body: str | None = Field(None, max_length=10_000)
