"""Authentication endpoints."""

from fastapi import APIRouter, status
from starlette.requests import Request

from src.taskboard.api.dependencies import AuthServiceDep
from src.taskboard.core.rate_limit import (
    LOGIN_LIMIT,
    REGISTER_LIMIT,
    RESET_PASSWORD_LIMIT,
    limiter,
)
from src.taskboard.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisteredUser,
    RegisterRequest,
    RegisterResponse,
    ResetPasswordRequest,
    SessionUser,
)
from src.taskboard.schemas.base import OkMessageResponse

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {
            "description": "Account created",
            "content": {
                "application/json": {
                    "example": {
                        "ok": True,
                        "user": {
                            "id": "3f2b9c0e5d4a4f6b8e1c2a7d9b0e4f13",
                            "email": "alice@example.com",
                            "name": "alice",
                            "role": "user",
                        },
                    }
                }
            },
        },
        400: {"description": "Email already registered or invalid input"},
        403: {"description": "Admin self-registration is disabled"},
    },
)
@limiter.limit(REGISTER_LIMIT)
async def register(
    request: Request, data: RegisterRequest, service: AuthServiceDep
) -> RegisterResponse:
    """Create an account. The name defaults to the email's local part."""
    user = await service.register(data)
    return RegisterResponse(user=RegisteredUser.model_validate(user))


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        200: {
            "description": "Successful authentication",
            "content": {
                "application/json": {
                    "example": {
                        "ok": True,
                        "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                        "user": {
                            "id": "3f2b9c0e5d4a4f6b8e1c2a7d9b0e4f13",
                            "email": "alice@example.com",
                            "name": "alice",
                            "role": "user",
                            "avatarUrl": None,
                        },
                    }
                }
            },
        },
        401: {"description": "Invalid credentials"},
        403: {"description": "Role mismatch or account deactivated"},
    },
)
@limiter.limit(LOGIN_LIMIT)
async def login(request: Request, data: LoginRequest, service: AuthServiceDep) -> LoginResponse:
    """Authenticate and return a 7-day session token.

    Admins may use either login section; other accounts must match `userType`.
    """
    token, user = await service.login(data.email, data.password, data.user_type)
    return LoginResponse(token=token, user=SessionUser.model_validate(user))


@router.post(
    "/reset-password",
    response_model=OkMessageResponse,
    responses={
        400: {"description": "Missing email or password, or password too short"},
        404: {"description": "User not found, or the route is disabled"},
    },
)
@limiter.limit(RESET_PASSWORD_LIMIT)
async def reset_password(
    request: Request, data: ResetPasswordRequest, service: AuthServiceDep
) -> OkMessageResponse:
    """Set a new password knowing only the email.

    Demonstration only: no proof of mailbox ownership is required. Disable
    with `ENABLE_PASSWORD_RESET=false`.
    """
    await service.reset_password(data.email, data.password)
    return OkMessageResponse(message="Password has been reset successfully.")
