"""Socket.IO transport for the realtime hub."""

from typing import Any

import socketio
from socketio.exceptions import ConnectionRefusedError as SocketConnectionRefused

from src.taskboard.core.config import Settings
from src.taskboard.core.exceptions import InvalidTokenError
from src.taskboard.core.logging import get_logger
from src.taskboard.core.security import verify_token
from src.taskboard.realtime.hub import (
    ACTIVITY_NEW,
    JOIN_TEAM_BOARD,
    REGISTER,
    TEAM_CREATED,
    RealtimeHub,
    team_board_room,
    user_room,
)

logger = get_logger(__name__)


class SocketIOHub(RealtimeHub):
    """Wraps a `socketio.AsyncServer` and registers the client-facing handlers.

    Clients join their private room with `register(userId)` and a team board
    room with `joinTeamBoard(teamId)`. With `realtime_require_auth` the
    connect payload must carry a valid token and `register` is limited to
    the token's own user id. `activity:new` and `team:created` sent by a
    client are re-emitted to every connected socket.
    """

    def __init__(self, settings: Settings, server: socketio.AsyncServer | None = None):
        self.server = server or socketio.AsyncServer(
            async_mode="asgi",
            cors_allowed_origins=settings.cors_origins,
            logger=False,
            engineio_logger=False,
        )
        self._require_auth = settings.realtime_require_auth

        self.server.on("connect", self.handle_connect)
        self.server.on("disconnect", self.handle_disconnect)
        self.server.on(REGISTER, self.handle_register)
        self.server.on(JOIN_TEAM_BOARD, self.handle_join_team_board)
        self.server.on(ACTIVITY_NEW, self.handle_activity)
        self.server.on(TEAM_CREATED, self.handle_team_created)

    # --- RealtimeHub ---

    async def publish(self, room: str, event: str, payload: dict[str, Any]) -> None:
        await self.server.emit(event, payload, room=room)

    async def broadcast(self, event: str, payload: dict[str, Any]) -> None:
        await self.server.emit(event, payload)

    async def subscribe(self, sid: str, room: str) -> None:
        await self.server.enter_room(sid, room)

    # --- Socket handlers ---

    async def handle_connect(
        self, sid: str, environ: dict[str, Any], auth: dict[str, Any] | None = None
    ) -> None:
        token = auth.get("token") if isinstance(auth, dict) else None
        user_id: str | None = None

        if token:
            try:
                user_id = verify_token(token).sub
            except InvalidTokenError as e:
                logger.warning("Socket connect with invalid token", sid=sid)
                if self._require_auth:
                    raise SocketConnectionRefused(e.message) from e
        elif self._require_auth:
            logger.warning("Socket connect rejected: no token", sid=sid)
            raise SocketConnectionRefused("Authentication token required.")

        await self.server.save_session(sid, {"user_id": user_id})
        logger.debug("Socket connected", sid=sid, user_id=user_id)

    async def handle_disconnect(self, sid: str, *args: Any) -> None:
        logger.debug("Socket disconnected", sid=sid)

    async def handle_register(self, sid: str, user_id: Any) -> None:
        if not user_id:
            return
        user_id = str(user_id)
        if self._require_auth:
            session = await self.server.get_session(sid)
            if session.get("user_id") != user_id:
                logger.warning("Socket register rejected for foreign user id", sid=sid)
                return
        await self.subscribe(sid, user_room(user_id))

    async def handle_join_team_board(self, sid: str, team_id: Any) -> None:
        if not team_id:
            return
        await self.subscribe(sid, team_board_room(str(team_id)))

    async def handle_activity(self, sid: str, payload: Any) -> None:
        if not isinstance(payload, dict):
            payload = {"activity": payload}
        await self.broadcast(ACTIVITY_NEW, payload)

    async def handle_team_created(self, sid: str, team: Any) -> None:
        if not isinstance(team, dict):
            return
        await self.broadcast(TEAM_CREATED, team)
