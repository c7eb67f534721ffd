"""Database package - engine construction and reachability monitoring."""

from src.taskboard.core.db.engine import create_engine, create_session_factory
from src.taskboard.core.db.monitor import ConnectionMonitor

__all__ = [
    "ConnectionMonitor",
    "create_engine",
    "create_session_factory",
]
