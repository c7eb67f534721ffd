"""Storage-agnostic repository contract.

Every entity family has one abstract repository here and two concrete
implementations: `volatile/` (process-local maps) and `persistent/` (SQL).
Handlers only ever see these abstract types.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from sqlmodel import SQLModel

from src.taskboard.core.security import normalize_email
from src.taskboard.models import (
    Board,
    Message,
    Task,
    Team,
    TeamMember,
    User,
    UserStats,
    utc_now,
)

EntityType = TypeVar("EntityType", bound=SQLModel)

# Fields a patch can never overwrite
IMMUTABLE_FIELDS = frozenset({"id", "created_at"})


def apply_patch(entity: EntityType, patch: dict[str, Any]) -> EntityType:
    """Merge `patch` into a validated copy of `entity`.

    Both backings route updates through here so they agree on semantics:
    unknown keys are rejected, ids are immutable, `updated_at` is bumped.
    """
    model = type(entity)
    unknown = set(patch) - set(model.model_fields)
    if unknown:
        raise ValueError(f"Unknown fields for {model.__name__}: {sorted(unknown)}")

    data = entity.model_dump()
    data.update({key: value for key, value in patch.items() if key not in IMMUTABLE_FIELDS})
    if "updated_at" in model.model_fields and "updated_at" not in patch:
        data["updated_at"] = utc_now()
    return model.model_validate(data)


class BaseRepository(ABC, Generic[EntityType]):
    """Query surface shared by every entity family.

    `criteria` are field equality filters. Results of `find_many` are ordered
    by creation time, oldest first.
    """

    entity: type[EntityType]

    @abstractmethod
    async def get_by_id(self, entity_id: str) -> EntityType | None: ...

    @abstractmethod
    async def find_one(self, **criteria: Any) -> EntityType | None: ...

    @abstractmethod
    async def find_many(self, **criteria: Any) -> list[EntityType]: ...

    @abstractmethod
    async def create(self, entity: EntityType) -> EntityType: ...

    @abstractmethod
    async def update(self, entity_id: str, patch: dict[str, Any]) -> EntityType:
        """Apply `patch` and return the stored entity. Raises NotFoundError."""

    @abstractmethod
    async def delete(self, entity_id: str) -> bool: ...

    @abstractmethod
    async def count(self, **criteria: Any) -> int: ...


class UserRepository(BaseRepository[User]):
    entity = User

    async def get_by_email(self, email: str) -> User | None:
        return await self.find_one(email=normalize_email(email))

    @abstractmethod
    async def stats(self) -> UserStats: ...


class BoardRepository(BaseRepository[Board]):
    entity = Board

    @abstractmethod
    async def list_accessible(self, user_id: str) -> list[Board]:
        """Boards the user owns or was shared into."""

    @abstractmethod
    async def add_member(self, board_id: str, user_id: str) -> Board:
        """Idempotently share the board. Raises NotFoundError."""


class TaskRepository(BaseRepository[Task]):
    entity = Task

    async def list_by_team(self, team_id: str) -> list[Task]:
        return await self.find_many(team_id=team_id)


class TeamRepository(BaseRepository[Team]):
    entity = Team

    @abstractmethod
    async def list_for_member(self, user_id: str) -> list[Team]: ...

    @abstractmethod
    async def add_member(self, team_id: str, member: TeamMember) -> Team:
        """Append `member` unless already present.

        Raises:
            NotFoundError: unknown team.
            TeamFullError: membership already at `settings.max_members`.
        """


class MessageRepository(BaseRepository[Message]):
    entity = Message

    @abstractmethod
    async def conversation(self, user_id: str, other_id: str) -> list[Message]:
        """Messages exchanged in either direction, oldest first."""

    @abstractmethod
    async def unread_counts(self, recipient_id: str) -> dict[str, int]:
        """Unread messages addressed to `recipient_id`, keyed by sender."""

    @abstractmethod
    async def mark_conversation_read(self, reader_id: str, other_id: str) -> int:
        """Stamp `read_at` on unread messages from `other_id`. Returns how many changed."""
