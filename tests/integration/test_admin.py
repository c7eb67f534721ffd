"""Tests for the admin endpoints."""

import pytest
from httpx import AsyncClient

from src.taskboard.models import UserRole
from src.taskboard.repositories import Repositories
from tests.factories import DEFAULT_TEST_PASSWORD, UserFactory
from tests.helpers import create_admin, login, register_and_login

pytestmark = pytest.mark.integration


class TestAdminAccess:
    async def test_regular_user_forbidden(self, client: AsyncClient) -> None:
        user = await register_and_login(client)

        response = await client.get("/api/admin/users", headers=user.headers)

        assert response.status_code == 403
        assert response.json()["error"] == "Admin access required"

    async def test_unauthenticated(self, client: AsyncClient) -> None:
        response = await client.get("/api/admin/stats")

        assert response.status_code == 401

    async def test_demoted_admin_token_loses_access(
        self, client: AsyncClient, repos: Repositories
    ) -> None:
        admin = await create_admin(repos, client)
        await repos.users.update(admin.id, {"role": UserRole.USER})

        response = await client.get("/api/admin/users", headers=admin.headers)

        assert response.status_code == 403


class TestUserManagement:
    async def test_list_users(self, client: AsyncClient, repos: Repositories) -> None:
        admin = await create_admin(repos, client)
        user = await register_and_login(client)

        response = await client.get("/api/admin/users", headers=admin.headers)

        assert response.status_code == 200
        ids = {entry["id"] for entry in response.json()}
        assert ids == {admin.id, user.id}
        assert all("passwordHash" not in entry for entry in response.json())

    async def test_create_user(self, client: AsyncClient, repos: Repositories) -> None:
        admin = await create_admin(repos, client)

        response = await client.post(
            "/api/admin/users",
            json={"email": "New.Admin@Example.com", "password": "pw123456", "role": "admin"},
            headers=admin.headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["email"] == "new.admin@example.com"
        assert data["name"] == "new.admin"
        assert data["role"] == "admin"
        await login(client, "new.admin@example.com", "pw123456", user_type="admin")

    async def test_create_duplicate(self, client: AsyncClient, repos: Repositories) -> None:
        admin = await create_admin(repos, client)

        response = await client.post(
            "/api/admin/users",
            json={"email": admin.email, "password": "pw123456"},
            headers=admin.headers,
        )

        assert response.status_code == 400
        assert response.json()["code"] == "EMAIL_ALREADY_REGISTERED"

    async def test_get_user(self, client: AsyncClient, repos: Repositories) -> None:
        admin = await create_admin(repos, client)
        user = await register_and_login(client)

        found = await client.get(f"/api/admin/users/{user.id}", headers=admin.headers)
        missing = await client.get("/api/admin/users/nobody", headers=admin.headers)

        assert found.json()["email"] == user.email
        assert missing.status_code == 404
        assert missing.json()["error"] == "User not found"

    async def test_deactivate_user(self, client: AsyncClient, repos: Repositories) -> None:
        admin = await create_admin(repos, client)
        user = await register_and_login(client)

        response = await client.patch(
            f"/api/admin/users/{user.id}", json={"isActive": False}, headers=admin.headers
        )

        assert response.status_code == 200
        assert response.json()["isActive"] is False
        refused = await client.post(
            "/api/auth/login", json={"email": user.email, "password": DEFAULT_TEST_PASSWORD}
        )
        assert refused.status_code == 403
        gated = await client.get("/api/users/me", headers=user.headers)
        assert gated.status_code == 401

    async def test_promote_user(self, client: AsyncClient, repos: Repositories) -> None:
        admin = await create_admin(repos, client)
        user = await register_and_login(client)

        await client.patch(
            f"/api/admin/users/{user.id}", json={"role": "admin"}, headers=admin.headers
        )

        response = await client.get("/api/admin/stats", headers=user.headers)
        assert response.status_code == 200

    async def test_delete_user(self, client: AsyncClient, repos: Repositories) -> None:
        admin = await create_admin(repos, client)
        user = await register_and_login(client)

        response = await client.delete(f"/api/admin/users/{user.id}", headers=admin.headers)

        assert response.status_code == 200
        assert response.json() == {"message": "User deleted successfully"}
        assert await repos.users.get_by_id(user.id) is None

    async def test_cannot_delete_self(self, client: AsyncClient, repos: Repositories) -> None:
        admin = await create_admin(repos, client)

        response = await client.delete(f"/api/admin/users/{admin.id}", headers=admin.headers)

        assert response.status_code == 400
        assert response.json()["error"] == "Cannot delete your own account"

    async def test_delete_missing(self, client: AsyncClient, repos: Repositories) -> None:
        admin = await create_admin(repos, client)

        response = await client.delete("/api/admin/users/nobody", headers=admin.headers)

        assert response.status_code == 404


class TestStats:
    async def test_stats(self, client: AsyncClient, repos: Repositories) -> None:
        admin = await create_admin(repos, client)
        await register_and_login(client)
        await repos.users.create(UserFactory.inactive())

        response = await client.get("/api/admin/stats", headers=admin.headers)

        data = response.json()
        assert data["totalUsers"] == 3
        assert data["activeUsers"] == 2
        assert data["inactiveUsers"] == 1
        assert data["adminUsers"] == 1
        assert data["regularUsers"] == 2
        assert data["lastUpdated"]
