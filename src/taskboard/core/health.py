"""Liveness endpoint and Prometheus metrics."""

import secrets

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.security import APIKeyHeader
from prometheus_client import CollectorRegistry
from prometheus_fastapi_instrumentator import Instrumentator

from src.taskboard.core.config import Settings


def setup_health_endpoint(app: FastAPI) -> None:
    """Register `GET /api/health`.

    Always 200 while the process serves requests; `persistent` (mirrored as
    `mongo`) tells whether the durable backing is currently in use.
    """

    @app.get("/api/health", tags=["health"])
    async def health(request: Request) -> dict[str, bool | str]:
        backing = request.app.state.repositories.backing
        return {
            "ok": True,
            "persistent": backing.is_persistent,
            "backing": backing.name,
            # Legacy name for `persistent`
            "mongo": backing.is_persistent,
        }


def setup_metrics(app: FastAPI, settings: Settings) -> None:
    """Configure Prometheus metrics with optional API key protection.

    Each app gets its own registry so several apps can live in one process.
    """
    instrumentator = Instrumentator(
        excluded_handlers=["/metrics", "/api/health"],
        registry=CollectorRegistry(),
    ).instrument(app)

    if settings.metrics_api_key:
        api_key_header = APIKeyHeader(name="X-Metrics-Key", auto_error=False)

        async def verify_metrics_key(
            api_key: str | None = Depends(api_key_header),
        ) -> None:
            if (
                api_key is None
                or settings.metrics_api_key is None
                or not secrets.compare_digest(api_key, settings.metrics_api_key)
            ):
                raise HTTPException(
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    detail="Invalid or missing metrics API key",
                )

        instrumentator.expose(app, endpoint="/metrics", dependencies=[Depends(verify_metrics_key)])
    else:
        instrumentator.expose(app, endpoint="/metrics")
