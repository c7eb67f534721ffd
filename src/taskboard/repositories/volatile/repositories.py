"""Volatile implementations of the entity repositories."""

from collections import Counter

from src.taskboard.core.exceptions import EmailAlreadyRegisteredError, NotFoundError, TeamFullError
from src.taskboard.models import (
    Board,
    Message,
    Task,
    Team,
    TeamMember,
    User,
    UserRole,
    UserStats,
    utc_now,
)
from src.taskboard.repositories.base import (
    BoardRepository,
    MessageRepository,
    TaskRepository,
    TeamRepository,
    UserRepository,
    apply_patch,
)
from src.taskboard.repositories.volatile.base import MemoryRepository


class MemoryUserRepository(MemoryRepository[User], UserRepository):
    async def create(self, entity: User) -> User:
        if any(user.email == entity.email for user in self._items.values()):
            raise EmailAlreadyRegisteredError()
        return await super().create(entity)

    async def stats(self) -> UserStats:
        users = list(self._items.values())
        active = sum(1 for user in users if user.is_active)
        admins = sum(1 for user in users if user.role == UserRole.ADMIN)
        return UserStats(
            total_users=len(users),
            active_users=active,
            inactive_users=len(users) - active,
            admin_users=admins,
            regular_users=len(users) - admins,
        )


class MemoryBoardRepository(MemoryRepository[Board], BoardRepository):
    async def list_accessible(self, user_id: str) -> list[Board]:
        boards = [board for board in self._items.values() if board.is_accessible_by(user_id)]
        return [self._copy(board) for board in self._sorted(boards)]

    async def add_member(self, board_id: str, user_id: str) -> Board:
        board = self._items.get(board_id)
        if board is None:
            raise NotFoundError()
        if user_id in board.members:
            return self._copy(board)
        updated = apply_patch(board, {"members": [*board.members, user_id]})
        self._items[board_id] = updated
        return self._copy(updated)


class MemoryTaskRepository(MemoryRepository[Task], TaskRepository):
    pass


class MemoryTeamRepository(MemoryRepository[Team], TeamRepository):
    async def list_for_member(self, user_id: str) -> list[Team]:
        teams = [team for team in self._items.values() if team.has_member(user_id)]
        return [self._copy(team) for team in self._sorted(teams)]

    async def add_member(self, team_id: str, member: TeamMember) -> Team:
        team = self._items.get(team_id)
        if team is None:
            raise NotFoundError("Team not found")
        if team.has_member(member.user_id):
            return self._copy(team)
        if team.is_full:
            raise TeamFullError()
        updated = apply_patch(team, {"members": [*team.members, member]})
        self._items[team_id] = updated
        return self._copy(updated)


class MemoryMessageRepository(MemoryRepository[Message], MessageRepository):
    async def conversation(self, user_id: str, other_id: str) -> list[Message]:
        directions = {(user_id, other_id), (other_id, user_id)}
        messages = [
            message
            for message in self._items.values()
            if (message.sender_id, message.recipient_id) in directions
        ]
        return [self._copy(message) for message in self._sorted(messages)]

    async def unread_counts(self, recipient_id: str) -> dict[str, int]:
        return dict(
            Counter(
                message.sender_id
                for message in self._items.values()
                if message.recipient_id == recipient_id and message.read_at is None
            )
        )

    async def mark_conversation_read(self, reader_id: str, other_id: str) -> int:
        now = utc_now()
        changed = 0
        for message_id, message in self._items.items():
            if (
                message.sender_id == other_id
                and message.recipient_id == reader_id
                and message.read_at is None
            ):
                self._items[message_id] = message.model_copy(update={"read_at": now})
                changed += 1
        return changed
