"""Tests for the profile endpoints and the authorization gate."""

from pathlib import Path

import pytest
from httpx import AsyncClient

from src.taskboard.core.config import Settings
from src.taskboard.core.security import verify_token
from src.taskboard.models import UserRole
from src.taskboard.repositories import Repositories
from tests.factories import DEFAULT_TEST_PASSWORD, UserFactory
from tests.helpers import create_admin, login, register_and_login

pytestmark = pytest.mark.integration

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


class TestAuthorizationGate:
    async def test_missing_token(self, client: AsyncClient) -> None:
        response = await client.get("/api/users/me")

        assert response.status_code == 401
        assert response.json()["code"] == "MISSING_TOKEN"
        assert response.json()["request_id"]

    async def test_non_bearer_scheme(self, client: AsyncClient) -> None:
        response = await client.get("/api/users/me", headers={"Authorization": "Basic abc"})

        assert response.status_code == 401

    async def test_tampered_token(self, client: AsyncClient) -> None:
        user = await register_and_login(client)
        position = len(user.token) - 10
        replacement = "A" if user.token[position] != "A" else "B"
        tampered = user.token[:position] + replacement + user.token[position + 1 :]

        response = await client.get(
            "/api/users/me", headers={"Authorization": f"Bearer {tampered}"}
        )

        assert response.status_code == 401
        assert response.json()["error"] == "Invalid or expired token."

    async def test_deleted_user_token_rejected(
        self, client: AsyncClient, repos: Repositories
    ) -> None:
        user = await register_and_login(client)
        await repos.users.delete(user.id)

        response = await client.get("/api/users/me", headers=user.headers)

        assert response.status_code == 401
        assert response.json()["code"] == "USER_NOT_FOUND"

    async def test_deactivated_user_token_rejected(
        self, client: AsyncClient, repos: Repositories
    ) -> None:
        user = await register_and_login(client)
        await repos.users.update(user.id, {"is_active": False})

        response = await client.get("/api/users/me", headers=user.headers)

        assert response.status_code == 401
        assert response.json()["code"] == "ACCOUNT_DISABLED"


class TestProfile:
    async def test_get_me(self, client: AsyncClient) -> None:
        user = await register_and_login(client, name="Dana")

        response = await client.get("/api/users/me", headers=user.headers)

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == user.id
        assert data["name"] == "Dana"
        assert data["isActive"] is True
        assert "passwordHash" not in data

    async def test_directory_lists_active_users_only(
        self, client: AsyncClient, repos: Repositories
    ) -> None:
        user = await register_and_login(client)
        hidden = await repos.users.create(UserFactory.inactive())

        response = await client.get("/api/users", headers=user.headers)

        ids = {entry["id"] for entry in response.json()}
        assert user.id in ids
        assert hidden.id not in ids

    async def test_rename_returns_fresh_token(self, client: AsyncClient) -> None:
        user = await register_and_login(client)

        response = await client.patch(
            "/api/users/me", json={"name": "  Renamed  "}, headers=user.headers
        )

        assert response.status_code == 200
        assert response.json()["user"]["name"] == "Renamed"
        assert verify_token(response.json()["token"]).name == "Renamed"

    async def test_non_admin_cannot_promote_self(
        self, client: AsyncClient, repos: Repositories
    ) -> None:
        user = await register_and_login(client)

        for _ in range(3):
            response = await client.patch(
                "/api/users/me", json={"role": "admin"}, headers=user.headers
            )
            assert response.status_code == 200
            assert response.json()["user"]["role"] == "user"

        stored = await repos.users.get_by_id(user.id)
        assert stored is not None
        assert stored.role == UserRole.USER

    async def test_admin_can_change_own_role(
        self, client: AsyncClient, repos: Repositories
    ) -> None:
        admin = await create_admin(repos, client)

        response = await client.patch(
            "/api/users/me", json={"role": "user"}, headers=admin.headers
        )

        assert response.json()["user"]["role"] == "user"
        assert verify_token(response.json()["token"]).role == "user"


class TestChangePassword:
    async def test_change_password(self, client: AsyncClient) -> None:
        user = await register_and_login(client)

        response = await client.patch(
            "/api/users/me/password",
            json={"currentPassword": DEFAULT_TEST_PASSWORD, "newPassword": "another-pw"},
            headers=user.headers,
        )

        assert response.status_code == 200
        assert response.json() == {"message": "Password changed successfully."}
        await login(client, user.email, "another-pw")

    async def test_wrong_current_password(self, client: AsyncClient) -> None:
        user = await register_and_login(client)

        response = await client.patch(
            "/api/users/me/password",
            json={"currentPassword": "not-it", "newPassword": "another-pw"},
            headers=user.headers,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Incorrect current password."

    async def test_missing_fields(self, client: AsyncClient) -> None:
        user = await register_and_login(client)

        response = await client.patch(
            "/api/users/me/password", json={"newPassword": "x"}, headers=user.headers
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Current and new passwords are required."


class TestAvatar:
    async def test_upload_avatar(self, client: AsyncClient, settings: Settings) -> None:
        user = await register_and_login(client)

        response = await client.post(
            "/api/users/me/avatar",
            files={"avatar": ("me.png", PNG_BYTES, "image/png")},
            headers=user.headers,
        )

        assert response.status_code == 200
        data = response.json()
        url = data["user"]["avatarUrl"]
        assert url.startswith("/uploads/avatar-")
        assert url.endswith(".png")
        assert verify_token(data["token"]).avatar_url == url
        assert (Path(settings.upload_dir) / url.removeprefix("/uploads/")).read_bytes() == PNG_BYTES

        served = await client.get(url)
        assert served.status_code == 200
        assert served.content == PNG_BYTES

    async def test_no_file(self, client: AsyncClient) -> None:
        user = await register_and_login(client)

        response = await client.post(
            "/api/users/me/avatar", data={"other": "x"}, headers=user.headers
        )

        assert response.status_code == 400
        assert response.json()["error"] == "No file uploaded."

    async def test_non_image_rejected(self, client: AsyncClient) -> None:
        user = await register_and_login(client)

        response = await client.post(
            "/api/users/me/avatar",
            files={"avatar": ("notes.txt", b"hello", "text/plain")},
            headers=user.headers,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Only image uploads are allowed."

    async def test_oversized_avatar_not_written(
        self, client: AsyncClient, settings: Settings
    ) -> None:
        settings.avatar_max_bytes = 16
        user = await register_and_login(client)

        response = await client.post(
            "/api/users/me/avatar",
            files={"avatar": ("big.png", PNG_BYTES, "image/png")},
            headers=user.headers,
        )

        assert response.status_code == 413
        upload_dir = Path(settings.upload_dir)
        assert not upload_dir.exists() or not any(upload_dir.iterdir())
