"""Board service - owner-or-member access and sharing."""

from src.taskboard.core.exceptions import (
    ForbiddenError,
    NotFoundError,
    SharingUnavailableError,
)
from src.taskboard.core.logging import get_logger
from src.taskboard.models import Board, Principal
from src.taskboard.realtime import (
    BOARD_SHARED,
    TEAM_BOARD_UPDATE,
    RealtimeHub,
    team_board_room,
    user_room,
)
from src.taskboard.repositories import Repositories
from src.taskboard.schemas.board import BoardCreate, BoardUpdate

logger = get_logger(__name__)


class BoardService:
    def __init__(self, repos: Repositories, hub: RealtimeHub):
        self.repos = repos
        self.hub = hub

    async def list_accessible(self, principal: Principal) -> list[Board]:
        return await self.repos.boards.list_accessible(principal.id)

    async def create(self, principal: Principal, data: BoardCreate) -> Board:
        board = await self.repos.boards.create(
            Board(
                title=(data.title or "").strip() or "Untitled Board",
                owner_id=principal.id,
                data=data.data or {},
            )
        )
        logger.info("Board created", board_id=board.id)
        return board

    async def get(self, principal: Principal, board_id: str) -> Board:
        """Fetch a board the principal owns or is a member of.

        Raises:
            NotFoundError: no such board.
            ForbiddenError: the principal is neither owner nor member.
        """
        board = await self.repos.boards.get_by_id(board_id)
        if board is None:
            raise NotFoundError("Not found")
        if not board.is_accessible_by(principal.id):
            raise ForbiddenError("Forbidden")
        return board

    async def update(self, principal: Principal, board_id: str, data: BoardUpdate) -> Board:
        await self.get(principal, board_id)

        patch = data.model_dump(exclude_none=True)
        board = await self.repos.boards.update(board_id, patch)
        await self.hub.publish(
            team_board_room(board.id),
            TEAM_BOARD_UPDATE,
            {"id": board.id, "data": board.data, "title": board.title},
        )
        return board

    async def share(self, principal: Principal, board_id: str, email: str) -> Board:
        """Add the user with `email` to the board's members. Owner only.

        Sharing needs the persistent backing; the volatile one answers 501.
        """
        if not self.repos.is_persistent:
            raise SharingUnavailableError()

        board = await self.repos.boards.get_by_id(board_id)
        if board is None:
            raise NotFoundError("Not found")
        if board.owner_id != principal.id:
            raise ForbiddenError("Only owner can share")

        member = await self.repos.users.get_by_email(email)
        if member is None:
            raise NotFoundError("User not found")

        board = await self.repos.boards.add_member(board.id, member.id)
        await self.hub.publish(
            user_room(member.id),
            BOARD_SHARED,
            {"boardId": board.id, "title": board.title},
        )
        logger.info("Board shared", board_id=board.id, member_id=member.id)
        return board
