"""Domain error taxonomy and the handlers that render it as `{error, code, request_id}`."""

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.taskboard.core.logging import get_logger

logger = get_logger(__name__)


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"
    message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(self.message)


# --- Families ---


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_ERROR"
    message = "Invalid request"


class AuthError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "AUTH_ERROR"
    message = "Authentication failed"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "FORBIDDEN"
    message = "Forbidden"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"
    message = "Not found"


class ConflictError(AppError):
    # Duplicate resources answer 400 to stay compatible with existing clients
    status_code = status.HTTP_400_BAD_REQUEST
    code = "CONFLICT"
    message = "Conflict"


class FeatureUnavailable(AppError):
    status_code = status.HTTP_501_NOT_IMPLEMENTED
    code = "NOT_IMPLEMENTED"
    message = "Not implemented"


class StorageUnavailable(AppError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "STORAGE_UNAVAILABLE"
    message = "Storage backend unavailable"


# --- Concrete errors ---


class PayloadTooLargeError(ValidationError):
    status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    code = "PAYLOAD_TOO_LARGE"
    message = "File too large"


class MissingTokenError(AuthError):
    code = "MISSING_TOKEN"
    message = "Authentication token required."


class InvalidTokenError(AuthError):
    code = "INVALID_TOKEN"
    message = "Invalid or expired token."


class UserNotFoundError(AuthError):
    code = "USER_NOT_FOUND"
    message = "User not found."


class InactiveUserError(AuthError):
    code = "ACCOUNT_DISABLED"
    message = "Account is deactivated."


class InvalidCredentialsError(AuthError):
    code = "INVALID_CREDENTIALS"
    message = "Invalid credentials"


class AccountDisabledError(ForbiddenError):
    code = "ACCOUNT_DISABLED"
    message = "This account has been deactivated."


class RoleMismatchError(ForbiddenError):
    code = "ROLE_MISMATCH"

    def __init__(self, role: str):
        super().__init__(
            f"This account is registered as {role}. Please use the {role} login section."
        )


class AdminRequiredError(ForbiddenError):
    code = "ADMIN_REQUIRED"
    message = "Admin access required"


class EmailAlreadyRegisteredError(ConflictError):
    code = "EMAIL_ALREADY_REGISTERED"
    message = "Email already registered"


class CannotDeleteSelfError(ValidationError):
    code = "CANNOT_DELETE_SELF"
    message = "Cannot delete your own account"


class TeamFullError(ConflictError):
    code = "TEAM_FULL"
    message = "Team has reached its member limit"


class InvalidTaskIdError(ValidationError):
    code = "INVALID_TASK_ID"
    message = "Invalid task ID"


class SharingUnavailableError(FeatureUnavailable):
    code = "SHARING_UNAVAILABLE"
    message = "Sharing is not implemented for in-memory mode."


def _error_body(message: str, code: str) -> dict[str, str | None]:
    return {"error": message, "code": code, "request_id": correlation_id.get()}


def _first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return ValidationError.message
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = str(first.get("msg", ValidationError.message))
    return f"{location}: {message}" if location else message


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        if isinstance(exc, StorageUnavailable):
            logger.warning("Storage unavailable", path=request.url.path, error=exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.message, exc.code),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_body(_first_validation_message(exc), ValidationError.code),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(str(exc.detail), f"HTTP_{exc.status_code}"),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = correlation_id.get()
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=request_id,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body(AppError.message, AppError.code),
        )
