"""Tests for direct messages, unread counts and recipient fan-out."""

import pytest
from httpx import AsyncClient

from src.taskboard.realtime import MESSAGE_NEW, LocalHub
from tests.helpers import register_and_login

pytestmark = pytest.mark.integration


class TestMessages:
    async def test_send_and_read_conversation(self, client: AsyncClient) -> None:
        alice = await register_and_login(client)
        bob = await register_and_login(client)

        sent = await client.post(
            f"/api/messages/{bob.id}", json={"body": "hi bob"}, headers=alice.headers
        )
        await client.post(
            f"/api/messages/{alice.id}", json={"body": "hi alice"}, headers=bob.headers
        )

        assert sent.status_code == 201
        assert sent.json()["from"] == alice.id
        assert sent.json()["to"] == bob.id
        assert sent.json()["readAt"] is None

        response = await client.get(f"/api/messages/{bob.id}", headers=alice.headers)
        assert [message["body"] for message in response.json()] == ["hi bob", "hi alice"]

    async def test_send_pushes_to_recipient_room_only(
        self, client: AsyncClient, hub: LocalHub
    ) -> None:
        alice = await register_and_login(client)
        bob = await register_and_login(client)
        carol = await register_and_login(client)
        await hub.subscribe("bob-socket", f"user:{bob.id}")
        await hub.subscribe("carol-socket", f"user:{carol.id}")

        sent = await client.post(
            f"/api/messages/{bob.id}", json={"body": "ping"}, headers=alice.headers
        )

        [delivery] = hub.inbox("bob-socket")
        assert delivery.event == MESSAGE_NEW
        assert delivery.payload["id"] == sent.json()["id"]
        assert delivery.payload["from"] == alice.id
        assert delivery.payload["body"] == "ping"
        assert hub.inbox("carol-socket") == []

    async def test_empty_body_rejected(self, client: AsyncClient, hub: LocalHub) -> None:
        alice = await register_and_login(client)
        bob = await register_and_login(client)

        response = await client.post(
            f"/api/messages/{bob.id}", json={"body": "   "}, headers=alice.headers
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Message body required"
        assert hub.events(MESSAGE_NEW) == []

    async def test_placeholder_partner_rejected(self, client: AsyncClient) -> None:
        alice = await register_and_login(client)

        response = await client.get("/api/messages/undefined", headers=alice.headers)

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid user ID"


class TestUnreadCounts:
    async def test_counts_until_marked_read(self, client: AsyncClient) -> None:
        alice = await register_and_login(client)
        bob = await register_and_login(client)
        for n in range(3):
            await client.post(
                f"/api/messages/{bob.id}", json={"body": f"m{n}"}, headers=alice.headers
            )

        before = await client.get("/api/messages/unread/counts", headers=bob.headers)
        assert before.json() == {alice.id: 3}

        marked = await client.post(f"/api/messages/{alice.id}/read", headers=bob.headers)
        assert marked.json() == {"ok": True}

        after = await client.get("/api/messages/unread/counts", headers=bob.headers)
        assert after.json().get(alice.id, 0) == 0

    async def test_marking_read_only_touches_incoming(self, client: AsyncClient) -> None:
        alice = await register_and_login(client)
        bob = await register_and_login(client)
        await client.post(
            f"/api/messages/{bob.id}", json={"body": "to bob"}, headers=alice.headers
        )

        # Alice reading her side must not clear Bob's unread message
        await client.post(f"/api/messages/{bob.id}/read", headers=alice.headers)

        counts = await client.get("/api/messages/unread/counts", headers=bob.headers)
        assert counts.json() == {alice.id: 1}
