"""Tests for team tasks, comments, attachments and board fan-out."""

from pathlib import Path

import pytest
from httpx import AsyncClient

from src.taskboard.core.config import Settings
from src.taskboard.realtime import TEAM_BOARD_UPDATE, LocalHub
from tests.helpers import AuthedUser, register_and_login

pytestmark = pytest.mark.integration

TEAM_ID = "team_0123456789abcdef"


async def create_task(
    client: AsyncClient, user: AuthedUser, team_id: str = TEAM_ID, **body
) -> dict:
    body.setdefault("title", "Write release notes")
    response = await client.post(f"/api/tasks/team/{team_id}", json=body, headers=user.headers)
    assert response.status_code == 201, response.json()
    return response.json()


class TestCreateTask:
    async def test_create_publishes_to_team_board(
        self, client: AsyncClient, hub: LocalHub
    ) -> None:
        user = await register_and_login(client)
        await hub.subscribe("board-viewer", f"teamBoard:{TEAM_ID}")
        await hub.subscribe("other-board", "teamBoard:team_other")

        task = await create_task(client, user, priority="high", assignedTo=[user.id])

        assert task["id"]
        assert task["teamId"] == TEAM_ID
        assert task["status"] == "todo"
        assert task["priority"] == "high"
        assert task["createdBy"] == user.id
        [delivery] = hub.inbox("board-viewer")
        assert delivery.event == TEAM_BOARD_UPDATE
        assert delivery.payload["task"]["id"] == task["id"]
        assert hub.inbox("other-board") == []

    async def test_sub_tasks_get_ids(self, client: AsyncClient) -> None:
        user = await register_and_login(client)

        task = await create_task(
            client, user, subTasks=[{"text": "draft"}, {"text": "review", "completed": True}]
        )

        assert [sub["text"] for sub in task["subTasks"]] == ["draft", "review"]
        assert all(sub["id"] for sub in task["subTasks"])
        assert task["subTasks"][1]["completed"] is True

    async def test_title_required(self, client: AsyncClient) -> None:
        user = await register_and_login(client)

        response = await client.post(
            f"/api/tasks/team/{TEAM_ID}", json={"title": ""}, headers=user.headers
        )

        assert response.status_code == 400

    async def test_placeholder_team_id_rejected(self, client: AsyncClient) -> None:
        user = await register_and_login(client)

        response = await client.post(
            "/api/tasks/team/undefined", json={"title": "x"}, headers=user.headers
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid team ID"

    async def test_list_by_team(self, client: AsyncClient) -> None:
        user = await register_and_login(client)
        first = await create_task(client, user, title="one")
        await create_task(client, user, team_id="team_other", title="elsewhere")

        response = await client.get(f"/api/tasks/team/{TEAM_ID}", headers=user.headers)

        assert [task["id"] for task in response.json()] == [first["id"]]


class TestUpdateTask:
    async def test_partial_update(self, client: AsyncClient, hub: LocalHub) -> None:
        user = await register_and_login(client)
        task = await create_task(client, user, description="keep me", dueDate="2030-01-01")

        response = await client.put(
            f"/api/tasks/{task['id']}",
            json={"status": "in-progress", "dueDate": None},
            headers=user.headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "in-progress"
        assert data["description"] == "keep me"
        assert data["dueDate"] is None
        assert hub.events(TEAM_BOARD_UPDATE)[-1].payload["task"]["status"] == "in-progress"

    async def test_invalid_id(self, client: AsyncClient) -> None:
        user = await register_and_login(client)

        response = await client.put("/api/tasks/null", json={"title": "x"}, headers=user.headers)

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_TASK_ID"

    async def test_missing_task(self, client: AsyncClient) -> None:
        user = await register_and_login(client)

        response = await client.put(
            "/api/tasks/does-not-exist", json={"title": "x"}, headers=user.headers
        )

        assert response.status_code == 404
        assert response.json()["error"] == "Task not found"


class TestDeleteTask:
    async def test_delete_publishes_deleted_id(self, client: AsyncClient, hub: LocalHub) -> None:
        user = await register_and_login(client)
        task = await create_task(client, user)

        response = await client.delete(f"/api/tasks/{task['id']}", headers=user.headers)

        assert response.status_code == 200
        assert response.json() == {"ok": True}
        last = hub.events(TEAM_BOARD_UPDATE)[-1]
        assert last.room == f"teamBoard:{TEAM_ID}"
        assert last.payload == {"deletedTaskId": task["id"]}

        listed = await client.get(f"/api/tasks/team/{TEAM_ID}", headers=user.headers)
        assert listed.json() == []

    async def test_delete_twice(self, client: AsyncClient) -> None:
        user = await register_and_login(client)
        task = await create_task(client, user)
        await client.delete(f"/api/tasks/{task['id']}", headers=user.headers)

        response = await client.delete(f"/api/tasks/{task['id']}", headers=user.headers)

        assert response.status_code == 404


class TestCommentsAndAttachments:
    async def test_add_comment(self, client: AsyncClient) -> None:
        user = await register_and_login(client)
        task = await create_task(client, user)

        response = await client.post(
            f"/api/tasks/{task['id']}/comments", json={"text": "Looks good"}, headers=user.headers
        )

        assert response.status_code == 201
        [comment] = response.json()["comments"]
        assert comment["text"] == "Looks good"
        assert comment["authorId"] == user.id

    async def test_add_attachment(
        self, client: AsyncClient, settings: Settings, hub: LocalHub
    ) -> None:
        user = await register_and_login(client)
        task = await create_task(client, user)

        response = await client.post(
            f"/api/tasks/{task['id']}/attachments",
            files={"file": ("spec.pdf", b"%PDF-1.4 test", "application/pdf")},
            headers=user.headers,
        )

        assert response.status_code == 201
        [attachment] = response.json()["attachments"]
        assert attachment["name"] == "spec.pdf"
        assert attachment["type"] == "application/pdf"
        assert attachment["size"] == len(b"%PDF-1.4 test")
        assert attachment["url"].startswith("/uploads/attachment-")
        stored = Path(settings.upload_dir) / attachment["url"].removeprefix("/uploads/")
        assert stored.read_bytes() == b"%PDF-1.4 test"
        assert hub.events(TEAM_BOARD_UPDATE)[-1].payload["task"]["attachments"] == [attachment]

    async def test_attachment_without_file(self, client: AsyncClient) -> None:
        user = await register_and_login(client)
        task = await create_task(client, user)

        response = await client.post(
            f"/api/tasks/{task['id']}/attachments", data={"note": "x"}, headers=user.headers
        )

        assert response.status_code == 400
        assert response.json()["error"] == "No file uploaded."

    async def test_oversized_attachment(self, client: AsyncClient, settings: Settings) -> None:
        settings.attachment_max_bytes = 4
        user = await register_and_login(client)
        task = await create_task(client, user)

        response = await client.post(
            f"/api/tasks/{task['id']}/attachments",
            files={"file": ("big.bin", b"0123456789", "application/octet-stream")},
            headers=user.headers,
        )

        assert response.status_code == 413
        assert response.json()["code"] == "PAYLOAD_TOO_LARGE"
