"""Authentication service - registration, login and the demonstration reset."""

import asyncio

from src.taskboard.core.config import Settings
from src.taskboard.core.exceptions import (
    AccountDisabledError,
    EmailAlreadyRegisteredError,
    ForbiddenError,
    InvalidCredentialsError,
    NotFoundError,
    RoleMismatchError,
    ValidationError,
)
from src.taskboard.core.logging import get_logger
from src.taskboard.core.security import (
    DUMMY_PASSWORD_HASH,
    MIN_PASSWORD_LENGTH,
    create_access_token,
    hash_password,
    verify_password,
)
from src.taskboard.models import User, UserRole, utc_now
from src.taskboard.repositories import Repositories
from src.taskboard.schemas.auth import RegisterRequest

logger = get_logger(__name__)


class AuthService:
    def __init__(self, repos: Repositories, settings: Settings):
        self.repos = repos
        self.settings = settings

    async def register(self, data: RegisterRequest) -> User:
        """Create a user account.

        The email is the sole uniqueness key. The display name defaults to
        the local part of the email.

        Raises:
            ForbiddenError: an admin role was requested and self-registration
                of admins is disabled.
            EmailAlreadyRegisteredError: the email is taken in the live backing.
        """
        role = data.role or UserRole.USER
        if role == UserRole.ADMIN and not self.settings.allow_admin_registration:
            raise ForbiddenError("Admin accounts can only be created by an administrator")

        if await self.repos.users.get_by_email(data.email) is not None:
            raise EmailAlreadyRegisteredError()

        name = (data.name or "").strip() or data.email.split("@", 1)[0]
        password_hash = await asyncio.to_thread(hash_password, data.password)
        user = await self.repos.users.create(
            User(email=data.email, password_hash=password_hash, name=name, role=role)
        )
        logger.info("User registered", user_id=user.id, backing=self.repos.backing.name)
        return user

    async def login(
        self, email: str, password: str, user_type: UserRole | None = None
    ) -> tuple[str, User]:
        """Verify credentials and issue a session token.

        Admins may sign in through either login section; everyone else must
        match the requested `user_type` when one is given.
        """
        user = await self.repos.users.get_by_email(email)

        # Always verify so unknown emails cost the same as wrong passwords
        password_hash = user.password_hash if user else DUMMY_PASSWORD_HASH
        password_valid = await asyncio.to_thread(verify_password, password, password_hash)

        if user is None or not password_valid:
            raise InvalidCredentialsError()

        if user_type is not None and user.role != UserRole.ADMIN and user.role != user_type:
            raise RoleMismatchError(user.role.value)

        if not user.is_active:
            raise AccountDisabledError()

        user = await self.repos.users.update(user.id, {"last_login": utc_now()})
        logger.info("User logged in", user_id=user.id)
        return create_access_token(user), user

    async def reset_password(self, email: str | None, password: str | None) -> None:
        """Overwrite a password knowing only the email. Demonstration only."""
        if not self.settings.enable_password_reset:
            raise NotFoundError()
        if not email or not password:
            raise ValidationError("Email and new password are required.")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"New password must be at least {MIN_PASSWORD_LENGTH} characters long."
            )

        user = await self.repos.users.get_by_email(email)
        if user is None:
            raise NotFoundError("User not found.")

        password_hash = await asyncio.to_thread(hash_password, password)
        await self.repos.users.update(user.id, {"password_hash": password_hash})
        logger.warning("Password reset without verification", user_id=user.id)
