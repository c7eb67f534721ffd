"""Direct messages between two users."""

from src.taskboard.core.exceptions import ValidationError
from src.taskboard.core.logging import get_logger
from src.taskboard.core.security import is_valid_entity_id
from src.taskboard.models import Message, Principal
from src.taskboard.realtime import MESSAGE_NEW, RealtimeHub, user_room
from src.taskboard.repositories import Repositories
from src.taskboard.schemas.message import MessageRead

logger = get_logger(__name__)


class MessageService:
    def __init__(self, repos: Repositories, hub: RealtimeHub):
        self.repos = repos
        self.hub = hub

    def _check_partner(self, other_id: str) -> None:
        if not is_valid_entity_id(other_id):
            raise ValidationError("Invalid user ID")

    async def conversation(self, principal: Principal, other_id: str) -> list[Message]:
        self._check_partner(other_id)
        return await self.repos.messages.conversation(principal.id, other_id)

    async def send(self, principal: Principal, recipient_id: str, body: str | None) -> Message:
        """Store a message and push it to the recipient's private room."""
        self._check_partner(recipient_id)
        text = (body or "").strip()
        if not text:
            raise ValidationError("Message body required")

        message = await self.repos.messages.create(
            Message(sender_id=principal.id, recipient_id=recipient_id, body=text)
        )
        await self.hub.publish(user_room(recipient_id), MESSAGE_NEW, MessageRead.payload(message))
        return message

    async def mark_read(self, principal: Principal, other_id: str) -> int:
        self._check_partner(other_id)
        changed = await self.repos.messages.mark_conversation_read(principal.id, other_id)
        logger.debug("Conversation marked read", other_id=other_id, changed=changed)
        return changed

    async def unread_counts(self, principal: Principal) -> dict[str, int]:
        return await self.repos.messages.unread_counts(principal.id)
