"""Authorization gate: bearer token -> Principal."""

from typing import Annotated

from fastapi import Depends, Header

from src.taskboard.api.dependencies.repositories import Repos
from src.taskboard.core.exceptions import (
    AdminRequiredError,
    InactiveUserError,
    MissingTokenError,
    UserNotFoundError,
)
from src.taskboard.core.logging import bind_user_context
from src.taskboard.core.security import verify_token
from src.taskboard.models import Principal


def _bearer_token(authorization: str | None) -> str:
    if not authorization:
        raise MissingTokenError()
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise MissingTokenError()
    return token.strip()


async def get_current_principal(
    repos: Repos,
    authorization: Annotated[str | None, Header()] = None,
) -> Principal:
    """Resolve the bearer token to the stored user.

    The token is only trusted for the subject id; name, role and active
    flag are read from the live backing so admin changes apply at once.

    Raises:
        MissingTokenError: no `Authorization: Bearer` header.
        InvalidTokenError: bad signature or expired.
        UserNotFoundError: the subject was deleted after the token was issued.
        InactiveUserError: the account has been deactivated.
    """
    claims = verify_token(_bearer_token(authorization))

    user = await repos.users.get_by_id(claims.sub)
    if user is None:
        raise UserNotFoundError()
    if not user.is_active:
        raise InactiveUserError()

    bind_user_context(user.id, user.email)
    return Principal.from_user(user)


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]


async def require_admin(principal: CurrentPrincipal) -> Principal:
    if not principal.is_admin:
        raise AdminRequiredError()
    return principal


AdminPrincipal = Annotated[Principal, Depends(require_admin)]
