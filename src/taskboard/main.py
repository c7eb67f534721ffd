from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import socketio
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.types import ASGIApp

from src.taskboard.api.middlewares import setup_middlewares
from src.taskboard.api.routes.router import api_router
from src.taskboard.core.config import Settings, get_settings
from src.taskboard.core.db import ConnectionMonitor, create_engine, create_session_factory
from src.taskboard.core.exceptions import setup_exception_handlers
from src.taskboard.core.health import setup_health_endpoint, setup_metrics
from src.taskboard.core.logging import get_logger, setup_logging
from src.taskboard.core.rate_limit import limiter
from src.taskboard.realtime import RealtimeHub, SocketIOHub
from src.taskboard.repositories import (
    Repositories,
    create_persistent_backing,
    create_volatile_backing,
)

logger = get_logger(__name__)


def build_repositories(settings: Settings) -> Repositories:
    """Volatile backing always; persistent backing when a database is configured."""
    if not settings.persistent_enabled:
        logger.info("Storage mode: volatile only", storage_mode=settings.storage_mode)
        return Repositories(volatile=create_volatile_backing())

    engine = create_engine(settings)
    monitor = ConnectionMonitor(engine, probe_interval=settings.storage_probe_interval)
    persistent = create_persistent_backing(create_session_factory(engine), monitor)
    return Repositories(volatile=create_volatile_backing(), persistent=persistent, monitor=monitor)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown."""
    settings: Settings = app.state.settings
    setup_logging(settings.debug)
    logger.info(f"Starting {settings.app_name}")

    monitor = app.state.repositories.monitor
    if monitor is not None:
        if not await monitor.probe():
            logger.warning(
                "Persistent storage unreachable at startup, serving from volatile backing"
            )
        monitor.start()

    yield

    logger.info("Closing connections...")
    if monitor is not None:
        await monitor.stop()
        await monitor.engine.dispose()
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "auth", "description": "Registration, login and password reset"},
    {"name": "users", "description": "Profile and user directory"},
    {"name": "boards", "description": "Boards and board sharing"},
    {"name": "messages", "description": "Direct messages"},
    {"name": "teams", "description": "Teams and membership"},
    {"name": "tasks", "description": "Team tasks, comments and attachments"},
    {"name": "admin", "description": "User administration"},
]


def create_app(
    settings: Settings | None = None,
    repositories: Repositories | None = None,
    hub: RealtimeHub | None = None,
) -> FastAPI:
    """Compose the HTTP application.

    `repositories` and `hub` default to the ones `settings` describe; tests
    inject their own.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Team task board API with dual-mode storage and realtime fan-out",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
        docs_url="/docs" if settings.enable_openapi else None,
        redoc_url="/redoc" if settings.enable_openapi else None,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
    )

    app.state.settings = settings
    app.state.repositories = repositories or build_repositories(settings)
    app.state.hub = hub or SocketIOHub(settings)

    setup_exception_handlers(app)
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]

    setup_middlewares(app, settings)

    app.include_router(api_router)
    setup_health_endpoint(app)
    setup_metrics(app, settings)

    app.mount(
        "/uploads",
        StaticFiles(directory=settings.upload_dir, check_dir=False),
        name="uploads",
    )

    return app


def create_asgi_app(app: FastAPI) -> ASGIApp:
    """Serve Socket.IO at `/socket.io` and everything else through FastAPI."""
    hub = app.state.hub
    if isinstance(hub, SocketIOHub):
        return socketio.ASGIApp(hub.server, other_asgi_app=app)
    return app


app = create_asgi_app(create_app())
