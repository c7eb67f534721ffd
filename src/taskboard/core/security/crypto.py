"""Cryptographic utilities - password hashing and session tokens."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import argon2
from jose import JWTError, jwt

from src.taskboard.core.config import get_settings
from src.taskboard.core.exceptions import InvalidTokenError

if TYPE_CHECKING:
    from src.taskboard.models import User


@dataclass(frozen=True)
class TokenClaims:
    """Identity fields carried by a session token."""

    sub: str
    email: str
    name: str
    role: str
    avatar_url: str | None
    issued_at: datetime
    expires_at: datetime


def _create_password_hasher() -> argon2.PasswordHasher:
    settings = get_settings()
    return argon2.PasswordHasher(
        time_cost=settings.argon2_time_cost,
        memory_cost=settings.argon2_memory_cost,
        parallelism=settings.argon2_parallelism,
    )


_password_hasher = _create_password_hasher()


def hash_password(password: str) -> str:
    """Hash password using Argon2id."""
    return _password_hasher.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """Verify password against hash. Returns False on any error."""
    try:
        return _password_hasher.verify(hashed, password)
    except argon2.exceptions.VerifyMismatchError:
        return False
    except argon2.exceptions.InvalidHashError:
        return False
    except argon2.exceptions.VerificationError:
        return False


# Verified against when the email is unknown so both login failures cost the same
DUMMY_PASSWORD_HASH = hash_password("taskboard-dummy-password")


def create_access_token(user: "User", expires_delta: timedelta | None = None) -> str:
    """Issue a signed session token for the user."""
    settings = get_settings()
    issued_at = datetime.now(UTC)
    expire = issued_at + (expires_delta or timedelta(days=settings.access_token_expire_days))

    to_encode: dict[str, Any] = {
        "sub": user.id,
        "email": user.email,
        "name": user.name,
        "role": user.role.value,
        "avatarUrl": user.avatar_url,
        "iat": issued_at,
        "exp": expire,
    }
    return jwt.encode(  # type: ignore[no-any-return]
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )


def decode_token(token: str) -> dict[str, Any] | None:
    """Decode and validate JWT token. Returns None on any error."""
    settings = get_settings()
    try:
        return jwt.decode(  # type: ignore[no-any-return]
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError:
        return None


def verify_token(token: str) -> TokenClaims:
    """Validate signature and expiry and return the claims.

    Raises:
        InvalidTokenError: bad signature, malformed payload, or expired token.
    """
    payload = decode_token(token)
    if payload is None:
        raise InvalidTokenError()

    try:
        expires_at = datetime.fromtimestamp(int(payload["exp"]), tz=UTC)
        issued_at = datetime.fromtimestamp(int(payload.get("iat", 0)), tz=UTC)
        claims = TokenClaims(
            sub=str(payload["sub"]),
            email=str(payload.get("email", "")),
            name=str(payload.get("name", "")),
            role=str(payload.get("role", "user")),
            avatar_url=payload.get("avatarUrl"),
            issued_at=issued_at,
            expires_at=expires_at,
        )
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidTokenError() from e

    if datetime.now(UTC) >= claims.expires_at:
        raise InvalidTokenError()
    return claims
