from sqlalchemy import and_, func, or_, update
from sqlmodel import select

from src.taskboard.models import Message, MessageRecord, utc_now
from src.taskboard.repositories.base import MessageRepository
from src.taskboard.repositories.persistent.base import SQLRepository


class SQLMessageRepository(SQLRepository[Message, MessageRecord], MessageRepository):
    record = MessageRecord

    async def conversation(self, user_id: str, other_id: str) -> list[Message]:
        async with self.session() as session:
            stmt = (
                select(MessageRecord)
                .where(
                    or_(
                        and_(
                            MessageRecord.sender_id == user_id,
                            MessageRecord.recipient_id == other_id,
                        ),
                        and_(
                            MessageRecord.sender_id == other_id,
                            MessageRecord.recipient_id == user_id,
                        ),
                    )
                )
                .order_by(MessageRecord.created_at)  # type: ignore[arg-type]
            )
            records = (await session.execute(stmt)).scalars().all()
            return await self.hydrate(session, records)

    async def unread_counts(self, recipient_id: str) -> dict[str, int]:
        async with self.session() as session:
            stmt = (
                select(MessageRecord.sender_id, func.count())
                .where(
                    MessageRecord.recipient_id == recipient_id,
                    MessageRecord.read_at.is_(None),  # type: ignore[union-attr]
                )
                .group_by(MessageRecord.sender_id)
            )
            rows = (await session.execute(stmt)).all()
        return {sender_id: int(count) for sender_id, count in rows}

    async def mark_conversation_read(self, reader_id: str, other_id: str) -> int:
        async with self.session() as session:
            stmt = (
                update(MessageRecord)
                .where(
                    MessageRecord.sender_id == other_id,  # type: ignore[arg-type]
                    MessageRecord.recipient_id == reader_id,  # type: ignore[arg-type]
                    MessageRecord.read_at.is_(None),  # type: ignore[union-attr]
                )
                .values(read_at=utc_now())
            )
            result = await session.execute(stmt)
            await session.commit()
        return int(result.rowcount or 0)
