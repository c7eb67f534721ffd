"""SQL backing built on async SQLAlchemy sessions over SQLModel records."""

from collections.abc import AsyncGenerator, Callable, Sequence
from contextlib import asynccontextmanager
from enum import Enum
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import func
from sqlalchemy.exc import (
    DBAPIError,
    DisconnectionError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlmodel import SQLModel, select

from src.taskboard.core.exceptions import NotFoundError, StorageUnavailable
from src.taskboard.repositories.base import BaseRepository, EntityType, apply_patch

RecordType = TypeVar("RecordType", bound=SQLModel)

UnavailableCallback = Callable[[Exception], None]


def is_connection_error(exc: BaseException) -> bool:
    """True for failures that mean the database cannot be reached, not a bad query."""
    if isinstance(exc, DBAPIError):
        return exc.connection_invalidated or isinstance(exc, (OperationalError, InterfaceError))
    return isinstance(exc, (DisconnectionError, OSError))


class SQLRepository(BaseRepository[EntityType], Generic[EntityType, RecordType]):
    """Maps entities onto one table.

    Each call opens its own session; connection-class failures are reported
    through `on_unavailable` and re-raised as StorageUnavailable.
    """

    record: type[RecordType]
    json_fields: ClassVar[frozenset[str]] = frozenset()

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        on_unavailable: UnavailableCallback | None = None,
    ):
        self._session_factory = session_factory
        self._on_unavailable = on_unavailable

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession]:
        try:
            async with self._session_factory() as session:
                yield session
        except (SQLAlchemyError, OSError) as e:
            if not is_connection_error(e):
                raise
            if self._on_unavailable is not None:
                self._on_unavailable(e)
            raise StorageUnavailable() from e

    # --- Mapping ---

    @property
    def _columns(self) -> set[str]:
        return set(self.record.model_fields)

    def record_values(self, entity: EntityType) -> dict[str, Any]:
        """Column values for `entity`; JSON columns get JSON-safe sub-documents."""
        data = entity.model_dump(include=self._columns)
        if self.json_fields:
            data.update(entity.model_dump(mode="json", include=set(self.json_fields)))
        return {
            key: value.value if isinstance(value, Enum) else value for key, value in data.items()
        }

    def to_entity(self, record: RecordType) -> EntityType:
        return self.entity.model_validate(record.model_dump())

    async def hydrate(
        self, session: AsyncSession, records: Sequence[RecordType]
    ) -> list[EntityType]:
        """Turn records into entities. Override to load related rows."""
        return [self.to_entity(record) for record in records]

    def where(self, **criteria: Any) -> list[Any]:
        return [
            getattr(self.record, field) == (value.value if isinstance(value, Enum) else value)
            for field, value in criteria.items()
        ]

    # --- Hooks for related rows ---

    async def after_create(self, session: AsyncSession, entity: EntityType) -> None:
        return None

    async def after_update(
        self, session: AsyncSession, entity: EntityType, patch: dict[str, Any]
    ) -> None:
        """Write patched fields that live outside the record's own columns."""
        return None

    async def before_delete(self, session: AsyncSession, entity_id: str) -> None:
        return None

    # --- Contract ---

    async def get_by_id(self, entity_id: str) -> EntityType | None:
        async with self.session() as session:
            record = await session.get(self.record, entity_id)
            if record is None:
                return None
            return (await self.hydrate(session, [record]))[0]

    async def find_one(self, **criteria: Any) -> EntityType | None:
        async with self.session() as session:
            stmt = (
                select(self.record)
                .where(*self.where(**criteria))
                .order_by(self.record.created_at)  # type: ignore[attr-defined]
                .limit(1)
            )
            record = (await session.execute(stmt)).scalars().first()
            if record is None:
                return None
            return (await self.hydrate(session, [record]))[0]

    async def find_many(self, **criteria: Any) -> list[EntityType]:
        async with self.session() as session:
            stmt = (
                select(self.record)
                .where(*self.where(**criteria))
                .order_by(self.record.created_at)  # type: ignore[attr-defined]
            )
            records = (await session.execute(stmt)).scalars().all()
            return await self.hydrate(session, records)

    async def create(self, entity: EntityType) -> EntityType:
        async with self.session() as session:
            session.add(self.record(**self.record_values(entity)))
            await session.flush()
            await self.after_create(session, entity)
            await session.commit()
        return entity.model_copy(deep=True)

    async def update(self, entity_id: str, patch: dict[str, Any]) -> EntityType:
        async with self.session() as session:
            record = await session.get(self.record, entity_id)
            if record is None:
                raise NotFoundError()
            current = (await self.hydrate(session, [record]))[0]
            updated = apply_patch(current, patch)
            for field, value in self.record_values(updated).items():
                setattr(record, field, value)
            await self.after_update(session, updated, patch)
            await session.commit()
        return updated

    async def delete(self, entity_id: str) -> bool:
        async with self.session() as session:
            record = await session.get(self.record, entity_id)
            if record is None:
                return False
            await self.before_delete(session, entity_id)
            await session.delete(record)
            await session.commit()
        return True

    async def count(self, **criteria: Any) -> int:
        async with self.session() as session:
            stmt = select(func.count()).select_from(self.record).where(*self.where(**criteria))
            return int((await session.execute(stmt)).scalar_one())
