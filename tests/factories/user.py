"""User factory for test data generation."""

from polyfactory import Use

from src.taskboard.core.security import hash_password
from src.taskboard.models import User, UserRole
from tests.factories.base import BaseFactory, new_id, utc_now

# Default test password - stored for convenience in tests
DEFAULT_TEST_PASSWORD = "testpassword123"

_DEFAULT_PASSWORD_HASH = hash_password(DEFAULT_TEST_PASSWORD)


class UserFactory(BaseFactory):
    """Factory for generating User test data."""

    __model__ = User

    id = Use(new_id)
    email = Use(lambda: f"user_{new_id()[-8:]}@example.com")
    password_hash = _DEFAULT_PASSWORD_HASH
    name = "Test User"
    avatar_url = None
    role = UserRole.USER
    is_active = True
    last_login = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)

    @classmethod
    def admin(cls, **kwargs):
        """Create an admin."""
        return cls.build(role=UserRole.ADMIN, name=kwargs.pop("name", "Admin User"), **kwargs)

    @classmethod
    def inactive(cls, **kwargs):
        """Create a deactivated user."""
        return cls.build(is_active=False, **kwargs)
