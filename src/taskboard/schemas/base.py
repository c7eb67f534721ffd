from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, EmailStr, model_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from src.taskboard.core.security import normalize_email


def _normalize_email(value: Any) -> Any:
    return normalize_email(value) if isinstance(value, str) else value


# Trimmed and lowercased before any further validation
NormalizedEmail = Annotated[EmailStr, BeforeValidator(_normalize_email)]
EmailLookup = Annotated[str, BeforeValidator(_normalize_email)]


class APIModel(BaseModel):
    """camelCase on the wire, snake_case in Python; readable from entities."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    @classmethod
    def payload(cls, obj: Any) -> dict[str, Any]:
        """JSON-safe, camelCase dict for realtime events."""
        return cls.model_validate(obj).model_dump(mode="json", by_alias=True)


class CredentialsModel(APIModel):
    """Bodies that carry an email and a password.

    A missing or empty credential is reported with one message before any
    per-field validation runs.
    """

    @model_validator(mode="before")
    @classmethod
    def require_credentials(cls, data: Any) -> Any:
        if isinstance(data, dict) and (not data.get("email") or not data.get("password")):
            raise PydanticCustomError("missing_credentials", "Email and password are required")
        return data


class OkResponse(APIModel):
    ok: bool = True


class MessageResponse(APIModel):
    message: str


class OkMessageResponse(APIModel):
    ok: bool = True
    message: str
