"""Process-lifetime collaborators held on `app.state` by `create_app`."""

from typing import Annotated

from fastapi import Depends, Request

from src.taskboard.core.config import Settings
from src.taskboard.realtime import RealtimeHub
from src.taskboard.repositories import Repositories


def get_repositories(request: Request) -> Repositories:
    return request.app.state.repositories  # type: ignore[no-any-return]


def get_hub(request: Request) -> RealtimeHub:
    return request.app.state.hub  # type: ignore[no-any-return]


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings  # type: ignore[no-any-return]


Repos = Annotated[Repositories, Depends(get_repositories)]
Hub = Annotated[RealtimeHub, Depends(get_hub)]
AppSettings = Annotated[Settings, Depends(get_app_settings)]
