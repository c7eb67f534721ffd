"""Test helper functions for common account and login patterns."""

from dataclasses import dataclass, field

from httpx import AsyncClient

from src.taskboard.repositories import Repositories
from tests.factories import DEFAULT_TEST_PASSWORD, UserFactory, new_id


@dataclass
class AuthedUser:
    """A registered user with a live session token."""

    id: str
    email: str
    name: str
    token: str
    headers: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.headers = {"Authorization": f"Bearer {self.token}"}


async def login(
    client: AsyncClient,
    email: str,
    password: str = DEFAULT_TEST_PASSWORD,
    user_type: str | None = None,
) -> AuthedUser:
    """Log in through the API and return the session.

    Args:
        client: HTTP client bound to the app
        email: Account email
        password: Account password
        user_type: Login section ("user" or "admin"), omitted when None

    Returns:
        AuthedUser carrying the bearer headers
    """
    body: dict[str, str] = {"email": email, "password": password}
    if user_type is not None:
        body["userType"] = user_type

    response = await client.post("/api/auth/login", json=body)
    assert response.status_code == 200, response.json()
    data = response.json()
    return AuthedUser(
        id=data["user"]["id"],
        email=data["user"]["email"],
        name=data["user"]["name"],
        token=data["token"],
    )


async def register_and_login(
    client: AsyncClient,
    email: str | None = None,
    password: str = DEFAULT_TEST_PASSWORD,
    name: str | None = None,
) -> AuthedUser:
    """Register a fresh account through the API and log it in."""
    email = email or f"user_{new_id()[-8:]}@example.com"
    body: dict[str, str] = {"email": email, "password": password}
    if name is not None:
        body["name"] = name

    response = await client.post("/api/auth/register", json=body)
    assert response.status_code == 201, response.json()
    return await login(client, email, password)


async def create_admin(repos: Repositories, client: AsyncClient) -> AuthedUser:
    """Store an admin directly (admins cannot self-register) and log it in."""
    admin = await repos.users.create(UserFactory.admin())
    return await login(client, admin.email, user_type="admin")
