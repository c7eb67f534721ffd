"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import UserFactory, TeamFactory, ...
"""

from tests.factories.base import BaseFactory, new_id, utc_now
from tests.factories.entities import (
    BoardFactory,
    MessageFactory,
    TaskFactory,
    TeamFactory,
    TeamMemberFactory,
)
from tests.factories.user import DEFAULT_TEST_PASSWORD, UserFactory

__all__ = [
    # Base
    "BaseFactory",
    "new_id",
    "utc_now",
    # User
    "DEFAULT_TEST_PASSWORD",
    "UserFactory",
    # Entities
    "BoardFactory",
    "MessageFactory",
    "TaskFactory",
    "TeamFactory",
    "TeamMemberFactory",
]
