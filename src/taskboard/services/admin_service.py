"""Administrative user management. Callers are already gated as admins."""

import asyncio

from src.taskboard.core.exceptions import (
    CannotDeleteSelfError,
    EmailAlreadyRegisteredError,
    NotFoundError,
)
from src.taskboard.core.logging import get_logger
from src.taskboard.core.security import hash_password
from src.taskboard.models import Principal, User, UserStats
from src.taskboard.repositories import Repositories
from src.taskboard.schemas.user import AdminUserCreate, AdminUserUpdate

logger = get_logger(__name__)


class AdminService:
    def __init__(self, repos: Repositories):
        self.repos = repos

    async def list_users(self) -> list[User]:
        return await self.repos.users.find_many()

    async def get_user(self, user_id: str) -> User:
        user = await self.repos.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def create_user(self, admin: Principal, data: AdminUserCreate) -> User:
        if await self.repos.users.get_by_email(data.email) is not None:
            raise EmailAlreadyRegisteredError()

        password_hash = await asyncio.to_thread(hash_password, data.password)
        user = await self.repos.users.create(
            User(
                email=data.email,
                password_hash=password_hash,
                name=(data.name or "").strip() or data.email.split("@", 1)[0],
                role=data.role,
                is_active=data.is_active,
            )
        )
        logger.info("User created by admin", user_id=user.id, admin_id=admin.id)
        return user

    async def update_user(self, admin: Principal, user_id: str, data: AdminUserUpdate) -> User:
        await self.get_user(user_id)
        patch = data.model_dump(exclude_none=True)
        if "name" in patch and not patch["name"].strip():
            del patch["name"]

        user = await self.repos.users.update(user_id, patch)
        logger.info(
            "User updated by admin", user_id=user.id, admin_id=admin.id, fields=sorted(patch)
        )
        return user

    async def delete_user(self, admin: Principal, user_id: str) -> None:
        """Hard-delete a user. References held by other entities are left dangling."""
        if user_id == admin.id:
            raise CannotDeleteSelfError()
        if not await self.repos.users.delete(user_id):
            raise NotFoundError("User not found")
        logger.warning("User deleted by admin", user_id=user_id, admin_id=admin.id)

    async def stats(self) -> UserStats:
        return await self.repos.users.stats()
