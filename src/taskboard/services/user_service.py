import asyncio

from fastapi import UploadFile

from src.taskboard.core.config import Settings
from src.taskboard.core.exceptions import UserNotFoundError, ValidationError
from src.taskboard.core.logging import get_logger
from src.taskboard.core.security import (
    MIN_PASSWORD_LENGTH,
    create_access_token,
    hash_password,
    verify_password,
)
from src.taskboard.models import Principal, User
from src.taskboard.repositories import Repositories
from src.taskboard.schemas.user import ProfileUpdate
from src.taskboard.services.upload_service import UploadService

logger = get_logger(__name__)


class UserService:
    """Self-service profile operations for the authenticated principal."""

    def __init__(self, repos: Repositories, settings: Settings, uploads: UploadService):
        self.repos = repos
        self.settings = settings
        self.uploads = uploads

    async def get_profile(self, principal: Principal) -> User:
        user = await self.repos.users.get_by_id(principal.id)
        if user is None:
            raise UserNotFoundError()
        return user

    async def list_directory(self) -> list[User]:
        """Active users, for picking assignees and message partners."""
        return await self.repos.users.find_many(is_active=True)

    async def update_profile(self, principal: Principal, data: ProfileUpdate) -> tuple[User, str]:
        """Update name (anyone) and role (admins only).

        The role check reads the stored user, not the token claims, so a
        stale admin token cannot escalate a demoted account.
        """
        user = await self.get_profile(principal)
        patch: dict[str, object] = {}

        if data.name is not None and data.name.strip():
            patch["name"] = data.name.strip()
        if data.role is not None and user.is_admin:
            patch["role"] = data.role
        elif data.role is not None and data.role != user.role:
            logger.warning("Role change ignored for non-admin", user_id=user.id)

        if patch:
            user = await self.repos.users.update(user.id, patch)
        return user, create_access_token(user)

    async def update_avatar(
        self, principal: Principal, upload: UploadFile | None
    ) -> tuple[User, str]:
        if upload is None or not upload.filename:
            raise ValidationError("No file uploaded.")
        if not (upload.content_type or "").startswith("image/"):
            raise ValidationError("Only image uploads are allowed.")

        user = await self.get_profile(principal)
        stored = await self.uploads.save(
            upload, prefix="avatar", max_bytes=self.settings.avatar_max_bytes
        )
        user = await self.repos.users.update(user.id, {"avatar_url": stored.url})
        logger.info("Avatar updated", user_id=user.id)
        return user, create_access_token(user)

    async def change_password(
        self, principal: Principal, current_password: str | None, new_password: str | None
    ) -> None:
        if not current_password or not new_password:
            raise ValidationError("Current and new passwords are required.")
        if len(new_password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"New password must be at least {MIN_PASSWORD_LENGTH} characters long."
            )

        user = await self.get_profile(principal)
        if not await asyncio.to_thread(verify_password, current_password, user.password_hash):
            raise ValidationError("Incorrect current password.")

        password_hash = await asyncio.to_thread(hash_password, new_password)
        await self.repos.users.update(user.id, {"password_hash": password_hash})
        logger.info("Password changed", user_id=user.id)
