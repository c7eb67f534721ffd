import asyncio
from collections import defaultdict
from collections.abc import Sequence
from typing import Any

from sqlalchemy import delete, func
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlmodel import select

from src.taskboard.core.exceptions import NotFoundError, TeamFullError
from src.taskboard.models import (
    Team,
    TeamMember,
    TeamMemberRecord,
    TeamRecord,
    TeamSettings,
    utc_now,
)
from src.taskboard.repositories.base import TeamRepository
from src.taskboard.repositories.persistent.base import SQLRepository, UnavailableCallback


def _member_record(team_id: str, member: TeamMember, position: int) -> TeamMemberRecord:
    return TeamMemberRecord(
        team_id=team_id,
        user_id=member.user_id,
        position=position,
        email=member.email,
        name=member.name,
        role=member.role.value,
        is_active=member.is_active,
    )


class SQLTeamRepository(SQLRepository[Team, TeamRecord], TeamRepository):
    """Teams with ordered members in `team_members`.

    Joins count the members and insert in one transaction while holding the
    team row (`FOR UPDATE`), so concurrent joins cannot push a team past
    `max_members`. Joins from this process are also serialized locally,
    which covers databases that ignore row locks.
    """

    record = TeamRecord
    json_fields = frozenset({"settings"})

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        on_unavailable: UnavailableCallback | None = None,
    ):
        super().__init__(session_factory, on_unavailable)
        self._join_lock = asyncio.Lock()

    async def hydrate(self, session: AsyncSession, records: Sequence[TeamRecord]) -> list[Team]:
        if not records:
            return []
        stmt = (
            select(TeamMemberRecord)
            .where(TeamMemberRecord.team_id.in_([r.id for r in records]))  # type: ignore[attr-defined]
            .order_by(TeamMemberRecord.position)  # type: ignore[arg-type]
        )
        members: dict[str, list[dict]] = defaultdict(list)
        for row in (await session.execute(stmt)).scalars():
            members[row.team_id].append(
                row.model_dump(include={"user_id", "email", "name", "role", "is_active"})
            )
        return [
            Team.model_validate({**record.model_dump(), "members": members[record.id]})
            for record in records
        ]

    async def after_create(self, session: AsyncSession, entity: Team) -> None:
        for position, member in enumerate(entity.members):
            session.add(_member_record(entity.id, member, position))

    async def after_update(
        self, session: AsyncSession, entity: Team, patch: dict[str, Any]
    ) -> None:
        if "members" not in patch:
            return
        await self.before_delete(session, entity.id)
        await self.after_create(session, entity)

    async def before_delete(self, session: AsyncSession, entity_id: str) -> None:
        await session.execute(
            delete(TeamMemberRecord).where(TeamMemberRecord.team_id == entity_id)  # type: ignore[arg-type]
        )

    async def list_for_member(self, user_id: str) -> list[Team]:
        async with self.session() as session:
            stmt = (
                select(TeamRecord)
                .join(TeamMemberRecord, TeamMemberRecord.team_id == TeamRecord.id)  # type: ignore[arg-type]
                .where(TeamMemberRecord.user_id == user_id)
                .order_by(TeamRecord.created_at)  # type: ignore[arg-type]
            )
            records = (await session.execute(stmt)).scalars().all()
            return await self.hydrate(session, records)

    async def add_member(self, team_id: str, member: TeamMember) -> Team:
        async with self._join_lock, self.session() as session:
            locked = select(TeamRecord).where(TeamRecord.id == team_id).with_for_update()
            record = (await session.execute(locked)).scalars().first()
            if record is None:
                raise NotFoundError("Team not found")
            if await session.get(TeamMemberRecord, (team_id, member.user_id)) is None:
                count_stmt = (
                    select(func.count())
                    .select_from(TeamMemberRecord)
                    .where(TeamMemberRecord.team_id == team_id)
                )
                current = int((await session.execute(count_stmt)).scalar_one())
                if current >= TeamSettings.model_validate(record.settings).max_members:
                    raise TeamFullError()
                session.add(_member_record(team_id, member, current))
                record.updated_at = utc_now()
                await session.commit()
            return (await self.hydrate(session, [record]))[0]
