"""Profile endpoints for the authenticated user."""

from typing import Annotated

from fastapi import APIRouter, File, UploadFile

from src.taskboard.api.dependencies import CurrentPrincipal, UserServiceDep
from src.taskboard.schemas.base import MessageResponse
from src.taskboard.schemas.user import (
    AvatarResponse,
    PasswordChangeRequest,
    ProfileUpdate,
    ProfileUpdateResponse,
    PublicUser,
    UserProfile,
)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[PublicUser])
async def list_users(principal: CurrentPrincipal, service: UserServiceDep) -> list[PublicUser]:
    """Directory of active users."""
    users = await service.list_directory()
    return [PublicUser.model_validate(user) for user in users]


@router.get(
    "/me",
    response_model=UserProfile,
    responses={
        200: {
            "description": "Current user profile",
            "content": {
                "application/json": {
                    "example": {
                        "id": "3f2b9c0e5d4a4f6b8e1c2a7d9b0e4f13",
                        "email": "alice@example.com",
                        "name": "Alice",
                        "avatarUrl": "/uploads/avatar-1718000000000-42.png",
                        "role": "user",
                        "isActive": True,
                        "lastLogin": "2024-06-10T09:12:00",
                    }
                }
            },
        },
        401: {"description": "Not authenticated"},
    },
)
async def get_me(principal: CurrentPrincipal, service: UserServiceDep) -> UserProfile:
    user = await service.get_profile(principal)
    return UserProfile.model_validate(user)


@router.patch(
    "/me",
    response_model=ProfileUpdateResponse,
    responses={401: {"description": "Not authenticated"}},
)
async def update_me(
    data: ProfileUpdate, principal: CurrentPrincipal, service: UserServiceDep
) -> ProfileUpdateResponse:
    """Rename yourself. A role change is only honored for current admins.

    Returns a freshly issued token carrying the new claims.
    """
    user, token = await service.update_profile(principal, data)
    return ProfileUpdateResponse(user=UserProfile.model_validate(user), token=token)


@router.post(
    "/me/avatar",
    response_model=AvatarResponse,
    responses={
        400: {"description": "No file uploaded or not an image"},
        413: {"description": "Avatar larger than 5 MB"},
    },
)
async def upload_avatar(
    principal: CurrentPrincipal,
    service: UserServiceDep,
    avatar: Annotated[UploadFile | None, File()] = None,
) -> AvatarResponse:
    user, token = await service.update_avatar(principal, avatar)
    return AvatarResponse(user=UserProfile.model_validate(user), token=token)


@router.patch(
    "/me/password",
    response_model=MessageResponse,
    responses={400: {"description": "Missing fields, short password or wrong current password"}},
)
async def change_password(
    data: PasswordChangeRequest, principal: CurrentPrincipal, service: UserServiceDep
) -> MessageResponse:
    await service.change_password(principal, data.current_password, data.new_password)
    return MessageResponse(message="Password changed successfully.")
