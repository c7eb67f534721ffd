from sqlalchemy import case, func
from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from src.taskboard.core.exceptions import EmailAlreadyRegisteredError
from src.taskboard.models import User, UserRecord, UserRole, UserStats
from src.taskboard.repositories.base import UserRepository
from src.taskboard.repositories.persistent.base import SQLRepository


class SQLUserRepository(SQLRepository[User, UserRecord], UserRepository):
    record = UserRecord

    async def create(self, entity: User) -> User:
        # The unique index is the arbiter when two registrations race
        try:
            return await super().create(entity)
        except IntegrityError as e:
            raise EmailAlreadyRegisteredError() from e

    async def stats(self) -> UserStats:
        async with self.session() as session:
            stmt = select(
                func.count(),
                func.sum(case((UserRecord.is_active.is_(True), 1), else_=0)),  # type: ignore[attr-defined]
                func.sum(case((UserRecord.role == UserRole.ADMIN.value, 1), else_=0)),
            ).select_from(UserRecord)
            total, active, admins = (await session.execute(stmt)).one()

        total, active, admins = int(total or 0), int(active or 0), int(admins or 0)
        return UserStats(
            total_users=total,
            active_users=active,
            inactive_users=total - active,
            admin_users=admins,
            regular_users=total - admins,
        )
