from collections import defaultdict
from collections.abc import Iterable, Sequence
from datetime import timedelta
from typing import Any

from sqlalchemy import delete, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from src.taskboard.core.exceptions import NotFoundError
from src.taskboard.models import Board, BoardMemberRecord, BoardRecord, utc_now
from src.taskboard.repositories.base import BoardRepository
from src.taskboard.repositories.persistent.base import SQLRepository


def _member_records(board_id: str, user_ids: Iterable[str]) -> list[BoardMemberRecord]:
    # Rows are read back in created_at order, so stamps must be strictly increasing
    now = utc_now()
    return [
        BoardMemberRecord(
            board_id=board_id, user_id=user_id, created_at=now + timedelta(microseconds=offset)
        )
        for offset, user_id in enumerate(dict.fromkeys(user_ids))
    ]


class SQLBoardRepository(SQLRepository[Board, BoardRecord], BoardRepository):
    """Boards with their member ids kept in `board_members`."""

    record = BoardRecord
    json_fields = frozenset({"data"})

    async def hydrate(
        self, session: AsyncSession, records: Sequence[BoardRecord]
    ) -> list[Board]:
        if not records:
            return []
        stmt = (
            select(BoardMemberRecord)
            .where(BoardMemberRecord.board_id.in_([r.id for r in records]))  # type: ignore[attr-defined]
            .order_by(BoardMemberRecord.created_at)  # type: ignore[arg-type]
        )
        members: dict[str, list[str]] = defaultdict(list)
        for row in (await session.execute(stmt)).scalars():
            members[row.board_id].append(row.user_id)
        return [
            Board.model_validate({**record.model_dump(), "members": members[record.id]})
            for record in records
        ]

    async def after_create(self, session: AsyncSession, entity: Board) -> None:
        session.add_all(_member_records(entity.id, entity.members))

    async def after_update(
        self, session: AsyncSession, entity: Board, patch: dict[str, Any]
    ) -> None:
        if "members" not in patch:
            return
        await self.before_delete(session, entity.id)
        session.add_all(_member_records(entity.id, entity.members))

    async def before_delete(self, session: AsyncSession, entity_id: str) -> None:
        await session.execute(
            delete(BoardMemberRecord).where(BoardMemberRecord.board_id == entity_id)  # type: ignore[arg-type]
        )

    async def list_accessible(self, user_id: str) -> list[Board]:
        async with self.session() as session:
            shared = select(BoardMemberRecord.board_id).where(
                BoardMemberRecord.user_id == user_id
            )
            stmt = (
                select(BoardRecord)
                .where(or_(BoardRecord.owner_id == user_id, BoardRecord.id.in_(shared)))  # type: ignore[attr-defined]
                .order_by(BoardRecord.created_at)  # type: ignore[arg-type]
            )
            records = (await session.execute(stmt)).scalars().all()
            return await self.hydrate(session, records)

    async def add_member(self, board_id: str, user_id: str) -> Board:
        async with self.session() as session:
            record = await session.get(BoardRecord, board_id)
            if record is None:
                raise NotFoundError()
            existing = await session.get(BoardMemberRecord, (board_id, user_id))
            if existing is None:
                session.add(BoardMemberRecord(board_id=board_id, user_id=user_id))
                record.updated_at = utc_now()
                await session.commit()
            return (await self.hydrate(session, [record]))[0]
