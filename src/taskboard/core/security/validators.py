"""Input normalization shared by services and schemas."""

from typing import Final

MIN_PASSWORD_LENGTH: Final[int] = 6
MAX_PASSWORD_LENGTH: Final[int] = 128

# Values a client sends when it serialized a missing id
_PLACEHOLDER_IDS: Final[frozenset[str]] = frozenset({"undefined", "null"})


def normalize_email(email: str) -> str:
    """Emails are unique case-insensitively, so they are stored trimmed and lowercased."""
    return email.strip().lower()


def is_valid_entity_id(entity_id: str | None) -> bool:
    """Reject empty ids and the literal placeholders a JS client produces."""
    if entity_id is None:
        return False
    stripped = entity_id.strip()
    return bool(stripped) and stripped not in _PLACEHOLDER_IDS
