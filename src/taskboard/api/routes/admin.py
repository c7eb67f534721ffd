"""Administration endpoints. Every route requires an admin principal."""

from fastapi import APIRouter, status

from src.taskboard.api.dependencies import AdminPrincipal, AdminServiceDep
from src.taskboard.models import utc_now
from src.taskboard.schemas.base import MessageResponse
from src.taskboard.schemas.user import (
    AdminUserCreate,
    AdminUserRead,
    AdminUserUpdate,
    UserStatsRead,
)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/users", response_model=list[AdminUserRead])
async def list_users(admin: AdminPrincipal, service: AdminServiceDep) -> list[AdminUserRead]:
    users = await service.list_users()
    return [AdminUserRead.model_validate(user) for user in users]


@router.post(
    "/users",
    response_model=AdminUserRead,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Email already registered"}},
)
@router.post(
    "/users/new",
    response_model=AdminUserRead,
    status_code=status.HTTP_201_CREATED,
    include_in_schema=False,
)
async def create_user(
    data: AdminUserCreate, admin: AdminPrincipal, service: AdminServiceDep
) -> AdminUserRead:
    user = await service.create_user(admin, data)
    return AdminUserRead.model_validate(user)


@router.get(
    "/users/{user_id}",
    response_model=AdminUserRead,
    responses={404: {"description": "User not found"}},
)
async def get_user(user_id: str, admin: AdminPrincipal, service: AdminServiceDep) -> AdminUserRead:
    user = await service.get_user(user_id)
    return AdminUserRead.model_validate(user)


@router.patch(
    "/users/{user_id}",
    response_model=AdminUserRead,
    responses={404: {"description": "User not found"}},
)
async def update_user(
    user_id: str, data: AdminUserUpdate, admin: AdminPrincipal, service: AdminServiceDep
) -> AdminUserRead:
    user = await service.update_user(admin, user_id, data)
    return AdminUserRead.model_validate(user)


@router.delete(
    "/users/{user_id}",
    response_model=MessageResponse,
    responses={
        400: {"description": "Cannot delete your own account"},
        404: {"description": "User not found"},
    },
)
async def delete_user(
    user_id: str, admin: AdminPrincipal, service: AdminServiceDep
) -> MessageResponse:
    await service.delete_user(admin, user_id)
    return MessageResponse(message="User deleted successfully")


@router.get(
    "/stats",
    response_model=UserStatsRead,
    responses={
        200: {
            "description": "User counts",
            "content": {
                "application/json": {
                    "example": {
                        "totalUsers": 12,
                        "activeUsers": 11,
                        "inactiveUsers": 1,
                        "adminUsers": 2,
                        "regularUsers": 10,
                        "lastUpdated": "2024-06-10T09:12:00",
                    }
                }
            },
        }
    },
)
async def get_stats(admin: AdminPrincipal, service: AdminServiceDep) -> UserStatsRead:
    stats = await service.stats()
    return UserStatsRead.from_stats(stats, last_updated=utc_now())
