from datetime import UTC, datetime
from uuid import uuid4


def utc_now() -> datetime:
    """Return current UTC time as naive datetime (for TIMESTAMP columns).

    Database columns use TIMESTAMP WITHOUT TIME ZONE, so we strip tzinfo.
    All times are stored in UTC by convention.
    """
    return datetime.now(UTC).replace(tzinfo=None)


def new_id() -> str:
    """Opaque entity id shared by both backings."""
    return uuid4().hex
