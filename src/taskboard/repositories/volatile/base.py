"""Process-local backing: one dict per entity family, owned by a repository instance."""

from typing import Any

from sqlmodel import SQLModel

from src.taskboard.core.exceptions import NotFoundError
from src.taskboard.repositories.base import BaseRepository, EntityType, apply_patch


def _matches(entity: SQLModel, criteria: dict[str, Any]) -> bool:
    return all(getattr(entity, field) == value for field, value in criteria.items())


class MemoryRepository(BaseRepository[EntityType]):
    """Dict-backed repository.

    Entities are deep-copied on the way in and out so callers can never
    mutate stored state without going through `update`.
    """

    def __init__(self) -> None:
        self._items: dict[str, EntityType] = {}

    def _copy(self, entity: EntityType) -> EntityType:
        return entity.model_copy(deep=True)

    def _sorted(self, items: list[EntityType]) -> list[EntityType]:
        return sorted(items, key=lambda item: getattr(item, "created_at"))

    def _select(self, **criteria: Any) -> list[EntityType]:
        return self._sorted([item for item in self._items.values() if _matches(item, criteria)])

    def clear(self) -> int:
        """Drop every stored entity and return how many were dropped."""
        dropped = len(self._items)
        self._items.clear()
        return dropped

    async def get_by_id(self, entity_id: str) -> EntityType | None:
        item = self._items.get(entity_id)
        return self._copy(item) if item is not None else None

    async def find_one(self, **criteria: Any) -> EntityType | None:
        matches = self._select(**criteria)
        return self._copy(matches[0]) if matches else None

    async def find_many(self, **criteria: Any) -> list[EntityType]:
        return [self._copy(item) for item in self._select(**criteria)]

    async def create(self, entity: EntityType) -> EntityType:
        stored = self._copy(entity)
        self._items[stored.id] = stored  # type: ignore[attr-defined]
        return self._copy(stored)

    async def update(self, entity_id: str, patch: dict[str, Any]) -> EntityType:
        current = self._items.get(entity_id)
        if current is None:
            raise NotFoundError()
        updated = apply_patch(current, patch)
        self._items[entity_id] = updated
        return self._copy(updated)

    async def delete(self, entity_id: str) -> bool:
        return self._items.pop(entity_id, None) is not None

    async def count(self, **criteria: Any) -> int:
        return len(self._select(**criteria))
