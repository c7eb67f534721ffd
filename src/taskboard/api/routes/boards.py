"""Board endpoints. Access is owner-or-member, checked per board."""

from fastapi import APIRouter, status

from src.taskboard.api.dependencies import BoardServiceDep, CurrentPrincipal
from src.taskboard.schemas.base import OkResponse
from src.taskboard.schemas.board import BoardCreate, BoardRead, BoardShareRequest, BoardUpdate

router = APIRouter(prefix="/boards", tags=["boards"])


@router.get("", response_model=list[BoardRead])
async def list_boards(principal: CurrentPrincipal, service: BoardServiceDep) -> list[BoardRead]:
    """Boards the caller owns or was shared into."""
    boards = await service.list_accessible(principal)
    return [BoardRead.from_entity(board) for board in boards]


@router.post("", response_model=BoardRead, status_code=status.HTTP_201_CREATED)
async def create_board(
    data: BoardCreate, principal: CurrentPrincipal, service: BoardServiceDep
) -> BoardRead:
    board = await service.create(principal, data)
    return BoardRead.from_entity(board)


@router.get(
    "/{board_id}",
    response_model=BoardRead,
    responses={403: {"description": "Forbidden"}, 404: {"description": "Not found"}},
)
async def get_board(
    board_id: str, principal: CurrentPrincipal, service: BoardServiceDep
) -> BoardRead:
    board = await service.get(principal, board_id)
    return BoardRead.from_entity(board)


@router.put(
    "/{board_id}",
    response_model=BoardRead,
    responses={403: {"description": "Forbidden"}, 404: {"description": "Not found"}},
)
async def update_board(
    board_id: str, data: BoardUpdate, principal: CurrentPrincipal, service: BoardServiceDep
) -> BoardRead:
    """Replace title and/or data; pushes `teamBoard:update` to the board room."""
    board = await service.update(principal, board_id, data)
    return BoardRead.from_entity(board)


@router.post(
    "/{board_id}/share",
    response_model=OkResponse,
    responses={
        403: {"description": "Only owner can share"},
        404: {"description": "Board or user not found"},
        501: {"description": "Sharing needs the persistent backing"},
    },
)
async def share_board(
    board_id: str,
    data: BoardShareRequest,
    principal: CurrentPrincipal,
    service: BoardServiceDep,
) -> OkResponse:
    await service.share(principal, board_id, data.email)
    return OkResponse()
