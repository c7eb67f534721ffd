"""Room-based publish/subscribe contract used by the services."""

from abc import ABC, abstractmethod
from typing import Any, Final

# Server -> client events
TEAM_BOARD_UPDATE: Final = "teamBoard:update"
BOARD_SHARED: Final = "board:shared"
MESSAGE_NEW: Final = "msg:new"
TEAM_CREATED: Final = "team:created"
TEAM_UPDATED: Final = "team:updated"
ACTIVITY_NEW: Final = "activity:new"

# Client -> server events
REGISTER: Final = "register"
JOIN_TEAM_BOARD: Final = "joinTeamBoard"


def user_room(user_id: str) -> str:
    """Private room for one user's notifications."""
    return f"user:{user_id}"


def team_board_room(resource_id: str) -> str:
    """Shared room for a team's task board (also used for standalone boards)."""
    return f"teamBoard:{resource_id}"


class RealtimeHub(ABC):
    """Best-effort fan-out to currently connected sockets.

    Nothing is queued or retried: a socket that is not in the room when an
    event is published never sees it.
    """

    @abstractmethod
    async def publish(self, room: str, event: str, payload: dict[str, Any]) -> None:
        """Deliver `event` to every socket subscribed to `room`."""

    @abstractmethod
    async def broadcast(self, event: str, payload: dict[str, Any]) -> None:
        """Deliver `event` to every connected socket."""

    @abstractmethod
    async def subscribe(self, sid: str, room: str) -> None:
        """Add socket `sid` to `room`."""
