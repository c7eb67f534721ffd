"""In-process hub: delivers into per-socket inboxes without a network transport."""

from collections import defaultdict
from dataclasses import dataclass
from typing import Any

from src.taskboard.realtime.hub import RealtimeHub


@dataclass(frozen=True)
class Delivery:
    event: str
    payload: dict[str, Any]
    room: str | None = None  # None for broadcasts


class LocalHub(RealtimeHub):
    def __init__(self) -> None:
        self._rooms: dict[str, set[str]] = defaultdict(set)
        self._inboxes: dict[str, list[Delivery]] = {}
        self.history: list[Delivery] = []

    def connect(self, sid: str) -> list[Delivery]:
        return self._inboxes.setdefault(sid, [])

    def disconnect(self, sid: str) -> None:
        self._inboxes.pop(sid, None)
        for members in self._rooms.values():
            members.discard(sid)

    def inbox(self, sid: str) -> list[Delivery]:
        return list(self._inboxes.get(sid, []))

    def events(self, event: str) -> list[Delivery]:
        return [delivery for delivery in self.history if delivery.event == event]

    async def subscribe(self, sid: str, room: str) -> None:
        self.connect(sid)
        self._rooms[room].add(sid)

    async def publish(self, room: str, event: str, payload: dict[str, Any]) -> None:
        delivery = Delivery(event=event, payload=payload, room=room)
        self.history.append(delivery)
        for sid in self._rooms.get(room, ()):
            self._inboxes[sid].append(delivery)

    async def broadcast(self, event: str, payload: dict[str, Any]) -> None:
        delivery = Delivery(event=event, payload=payload)
        self.history.append(delivery)
        for inbox in self._inboxes.values():
            inbox.append(delivery)
