"""Realtime fan-out: hub contract, Socket.IO transport and in-process hub."""

from src.taskboard.realtime.hub import (
    ACTIVITY_NEW,
    BOARD_SHARED,
    JOIN_TEAM_BOARD,
    MESSAGE_NEW,
    REGISTER,
    TEAM_BOARD_UPDATE,
    TEAM_CREATED,
    TEAM_UPDATED,
    RealtimeHub,
    team_board_room,
    user_room,
)
from src.taskboard.realtime.local import Delivery, LocalHub
from src.taskboard.realtime.socketio_hub import SocketIOHub

__all__ = [
    "ACTIVITY_NEW",
    "BOARD_SHARED",
    "JOIN_TEAM_BOARD",
    "MESSAGE_NEW",
    "REGISTER",
    "TEAM_BOARD_UPDATE",
    "TEAM_CREATED",
    "TEAM_UPDATED",
    "Delivery",
    "LocalHub",
    "RealtimeHub",
    "SocketIOHub",
    "team_board_room",
    "user_room",
]
