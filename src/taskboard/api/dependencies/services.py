"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.taskboard.api.dependencies.repositories import AppSettings, Hub, Repos
from src.taskboard.services import (
    AdminService,
    AuthService,
    BoardService,
    MessageService,
    TaskService,
    TeamService,
    UploadService,
    UserService,
)


def get_upload_service(settings: AppSettings) -> UploadService:
    return UploadService(settings)


UploadServiceDep = Annotated[UploadService, Depends(get_upload_service)]


def get_auth_service(repos: Repos, settings: AppSettings) -> AuthService:
    return AuthService(repos, settings)


def get_user_service(
    repos: Repos, settings: AppSettings, uploads: UploadServiceDep
) -> UserService:
    return UserService(repos, settings, uploads)


def get_board_service(repos: Repos, hub: Hub) -> BoardService:
    return BoardService(repos, hub)


def get_team_service(repos: Repos, hub: Hub) -> TeamService:
    return TeamService(repos, hub)


def get_task_service(
    repos: Repos, hub: Hub, settings: AppSettings, uploads: UploadServiceDep
) -> TaskService:
    return TaskService(repos, hub, settings, uploads)


def get_message_service(repos: Repos, hub: Hub) -> MessageService:
    return MessageService(repos, hub)


def get_admin_service(repos: Repos) -> AdminService:
    return AdminService(repos)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
BoardServiceDep = Annotated[BoardService, Depends(get_board_service)]
TeamServiceDep = Annotated[TeamService, Depends(get_team_service)]
TaskServiceDep = Annotated[TaskService, Depends(get_task_service)]
MessageServiceDep = Annotated[MessageService, Depends(get_message_service)]
AdminServiceDep = Annotated[AdminService, Depends(get_admin_service)]
