"""Per-IP rate limits for the unauthenticated auth routes.

Limits are kept in process memory; with several instances each one counts
separately. Disabled in the testing environment.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from src.taskboard.core.config import get_settings
from src.taskboard.core.logging import get_logger

logger = get_logger(__name__)

LOGIN_LIMIT = "10/minute"
REGISTER_LIMIT = "5/minute"
RESET_PASSWORD_LIMIT = "3/minute"


def get_rate_limit_key(request: Request) -> str:
    """Client IP only. User-controlled headers would let callers mint new buckets."""
    return get_remote_address(request) or "unknown"


def create_limiter() -> Limiter:
    settings = get_settings()

    if settings.app_env == "testing":
        logger.info("Rate limiter disabled (testing environment)")
        return Limiter(key_func=get_rate_limit_key, enabled=False)

    return Limiter(key_func=get_rate_limit_key)


# Reads settings at import time; a restart is needed to reconfigure
limiter = create_limiter()
