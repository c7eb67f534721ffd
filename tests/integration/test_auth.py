"""Tests for registration, login and the demonstration password reset."""

import pytest
from httpx import AsyncClient

from src.taskboard.core.security import verify_token
from src.taskboard.repositories import Repositories
from tests.factories import DEFAULT_TEST_PASSWORD, UserFactory
from tests.helpers import login, register_and_login

pytestmark = pytest.mark.integration


class TestRegistration:
    async def test_register_then_login(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/auth/register",
            json={"email": "alice@example.com", "password": "pw123456"},
        )
        assert response.status_code == 201
        assert response.json()["ok"] is True
        assert response.json()["user"]["name"] == "alice"
        assert response.json()["user"]["role"] == "user"

        response = await client.post(
            "/api/auth/login",
            json={"email": "alice@example.com", "password": "pw123456"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is True
        assert data["user"]["email"] == "alice@example.com"
        assert data["user"]["role"] == "user"
        assert verify_token(data["token"]).sub == data["user"]["id"]

        response = await client.post(
            "/api/auth/login",
            json={"email": "alice@example.com", "password": "wrong-password"},
        )
        assert response.status_code == 401
        assert response.json()["error"] == "Invalid credentials"

    async def test_duplicate_email_rejected(self, client: AsyncClient, repos: Repositories) -> None:
        body = {"email": "dup@example.com", "password": "pw123456"}
        assert (await client.post("/api/auth/register", json=body)).status_code == 201

        response = await client.post(
            "/api/auth/register", json={**body, "email": "  DUP@Example.com "}
        )

        assert response.status_code == 400
        assert response.json()["code"] == "EMAIL_ALREADY_REGISTERED"
        assert response.json()["error"] == "Email already registered"
        assert len(await repos.users.find_many()) == 1

    async def test_name_is_kept_when_given(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/auth/register",
            json={"email": "bob@example.com", "password": "pw123456", "name": "Bob B"},
        )

        assert response.json()["user"]["name"] == "Bob B"

    @pytest.mark.parametrize(
        "body",
        [{"email": "c@example.com"}, {"password": "pw123456"}, {"email": "", "password": ""}],
    )
    async def test_missing_credentials(self, client: AsyncClient, body: dict) -> None:
        response = await client.post("/api/auth/register", json=body)

        assert response.status_code == 400
        assert response.json()["error"] == "Email and password are required"
        assert response.json()["code"] == "VALIDATION_ERROR"

    async def test_short_password_rejected(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/auth/register", json={"email": "c@example.com", "password": "12345"}
        )

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    async def test_invalid_email_rejected(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/auth/register", json={"email": "not-an-email", "password": "pw123456"}
        )

        assert response.status_code == 400

    async def test_admin_self_registration_forbidden(
        self, client: AsyncClient, repos: Repositories
    ) -> None:
        response = await client.post(
            "/api/auth/register",
            json={"email": "root@example.com", "password": "pw123456", "role": "admin"},
        )

        assert response.status_code == 403
        assert await repos.users.get_by_email("root@example.com") is None


class TestLogin:
    async def test_missing_credentials(self, client: AsyncClient) -> None:
        response = await client.post("/api/auth/login", json={"email": "a@example.com"})

        assert response.status_code == 400
        assert response.json()["error"] == "Email and password are required"

    async def test_unknown_email_matches_wrong_password(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/auth/login", json={"email": "ghost@example.com", "password": "pw123456"}
        )

        assert response.status_code == 401
        assert response.json()["error"] == "Invalid credentials"

    async def test_login_records_last_login(
        self, client: AsyncClient, repos: Repositories
    ) -> None:
        user = await register_and_login(client)

        stored = await repos.users.get_by_id(user.id)
        assert stored is not None
        assert stored.last_login is not None

    async def test_role_mismatch(self, client: AsyncClient) -> None:
        user = await register_and_login(client)

        response = await client.post(
            "/api/auth/login",
            json={"email": user.email, "password": DEFAULT_TEST_PASSWORD, "userType": "admin"},
        )

        assert response.status_code == 403
        assert response.json()["code"] == "ROLE_MISMATCH"
        assert "registered as user" in response.json()["error"]

    async def test_admin_may_use_either_section(
        self, client: AsyncClient, repos: Repositories
    ) -> None:
        admin = await repos.users.create(UserFactory.admin())

        as_user = await login(client, admin.email, user_type="user")
        as_admin = await login(client, admin.email, user_type="admin")

        assert as_user.id == as_admin.id == admin.id

    async def test_inactive_account_refused(
        self, client: AsyncClient, repos: Repositories
    ) -> None:
        user = await repos.users.create(UserFactory.inactive())

        response = await client.post(
            "/api/auth/login", json={"email": user.email, "password": DEFAULT_TEST_PASSWORD}
        )

        assert response.status_code == 403
        assert response.json()["code"] == "ACCOUNT_DISABLED"


class TestResetPassword:
    async def test_reset_then_login_with_new_password(self, client: AsyncClient) -> None:
        user = await register_and_login(client)

        response = await client.post(
            "/api/auth/reset-password", json={"email": user.email, "password": "brand-new-pw"}
        )

        assert response.status_code == 200
        assert response.json() == {
            "ok": True,
            "message": "Password has been reset successfully.",
        }
        await login(client, user.email, "brand-new-pw")

    async def test_missing_fields(self, client: AsyncClient) -> None:
        response = await client.post("/api/auth/reset-password", json={"email": "a@example.com"})

        assert response.status_code == 400
        assert response.json()["error"] == "Email and new password are required."

    async def test_short_password(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/auth/reset-password", json={"email": "a@example.com", "password": "123"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "New password must be at least 6 characters long."

    async def test_unknown_user(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/auth/reset-password",
            json={"email": "ghost@example.com", "password": "pw123456"},
        )

        assert response.status_code == 404
        assert response.json()["error"] == "User not found."
