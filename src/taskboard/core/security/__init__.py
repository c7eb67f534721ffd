"""Security utilities - crypto and validators.

Re-exports all security-related functions for convenience.
"""

from src.taskboard.core.security.crypto import (
    DUMMY_PASSWORD_HASH,
    TokenClaims,
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
    verify_token,
)
from src.taskboard.core.security.validators import (
    MAX_PASSWORD_LENGTH,
    MIN_PASSWORD_LENGTH,
    is_valid_entity_id,
    normalize_email,
)

__all__ = [
    # Crypto
    "DUMMY_PASSWORD_HASH",
    "TokenClaims",
    "create_access_token",
    "decode_token",
    "hash_password",
    "verify_password",
    "verify_token",
    # Validators
    "MAX_PASSWORD_LENGTH",
    "MIN_PASSWORD_LENGTH",
    "is_valid_entity_id",
    "normalize_email",
]
