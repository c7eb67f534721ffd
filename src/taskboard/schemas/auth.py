from pydantic import Field

from src.taskboard.core.security import MAX_PASSWORD_LENGTH, MIN_PASSWORD_LENGTH
from src.taskboard.models import UserRole
from src.taskboard.schemas.base import APIModel, CredentialsModel, EmailLookup, NormalizedEmail


class RegisterRequest(CredentialsModel):
    email: NormalizedEmail
    password: str = Field(min_length=MIN_PASSWORD_LENGTH, max_length=MAX_PASSWORD_LENGTH)
    name: str | None = Field(None, max_length=100)
    role: UserRole | None = None


class RegisteredUser(APIModel):
    id: str
    email: str
    name: str
    role: UserRole


class RegisterResponse(APIModel):
    ok: bool = True
    user: RegisteredUser


class LoginRequest(CredentialsModel):
    email: EmailLookup = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=MAX_PASSWORD_LENGTH)
    user_type: UserRole | None = None


class SessionUser(APIModel):
    id: str
    email: str
    name: str
    role: UserRole
    avatar_url: str | None = None


class LoginResponse(APIModel):
    ok: bool = True
    token: str
    user: SessionUser


class ResetPasswordRequest(APIModel):
    # Presence is checked by the service for its exact message
    email: EmailLookup | None = None
    password: str | None = Field(None, max_length=MAX_PASSWORD_LENGTH)
