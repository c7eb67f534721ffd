"""Direct messaging endpoints."""

from fastapi import APIRouter, status

from src.taskboard.api.dependencies import CurrentPrincipal, MessageServiceDep
from src.taskboard.schemas.base import OkResponse
from src.taskboard.schemas.message import MessageCreate, MessageRead

router = APIRouter(prefix="/messages", tags=["messages"])


@router.get(
    "/unread/counts",
    response_model=dict[str, int],
    responses={
        200: {
            "description": "Unread messages per sender",
            "content": {"application/json": {"example": {"3f2b9c0e5d4a4f6b8e1c2a7d9b0e4f13": 2}}},
        }
    },
)
async def unread_counts(principal: CurrentPrincipal, service: MessageServiceDep) -> dict[str, int]:
    return await service.unread_counts(principal)


@router.get("/{user_id}", response_model=list[MessageRead], response_model_by_alias=True)
async def get_conversation(
    user_id: str, principal: CurrentPrincipal, service: MessageServiceDep
) -> list[MessageRead]:
    """Both directions of the conversation, oldest first."""
    messages = await service.conversation(principal, user_id)
    return [MessageRead.model_validate(message) for message in messages]


@router.post(
    "/{user_id}",
    response_model=MessageRead,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Message body required"}},
)
async def send_message(
    user_id: str, data: MessageCreate, principal: CurrentPrincipal, service: MessageServiceDep
) -> MessageRead:
    message = await service.send(principal, user_id, data.body)
    return MessageRead.model_validate(message)


@router.post("/{user_id}/read", response_model=OkResponse)
async def mark_read(
    user_id: str, principal: CurrentPrincipal, service: MessageServiceDep
) -> OkResponse:
    await service.mark_read(principal, user_id)
    return OkResponse()
