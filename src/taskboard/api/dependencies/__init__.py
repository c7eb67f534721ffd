"""FastAPI dependency injection definitions.

Re-exports all dependencies: `from src.taskboard.api.dependencies import CurrentPrincipal`
"""

# Auth
from src.taskboard.api.dependencies.auth import (
    AdminPrincipal,
    CurrentPrincipal,
    get_current_principal,
    require_admin,
)

# App state
from src.taskboard.api.dependencies.repositories import (
    AppSettings,
    Hub,
    Repos,
    get_app_settings,
    get_hub,
    get_repositories,
)

# Services
from src.taskboard.api.dependencies.services import (
    AdminServiceDep,
    AuthServiceDep,
    BoardServiceDep,
    MessageServiceDep,
    TaskServiceDep,
    TeamServiceDep,
    UploadServiceDep,
    UserServiceDep,
    get_admin_service,
    get_auth_service,
    get_board_service,
    get_message_service,
    get_task_service,
    get_team_service,
    get_upload_service,
    get_user_service,
)

__all__ = [
    # Auth
    "AdminPrincipal",
    "CurrentPrincipal",
    "get_current_principal",
    "require_admin",
    # App state
    "AppSettings",
    "Hub",
    "Repos",
    "get_app_settings",
    "get_hub",
    "get_repositories",
    # Services
    "AdminServiceDep",
    "AuthServiceDep",
    "BoardServiceDep",
    "MessageServiceDep",
    "TaskServiceDep",
    "TeamServiceDep",
    "UploadServiceDep",
    "UserServiceDep",
    "get_admin_service",
    "get_auth_service",
    "get_board_service",
    "get_message_service",
    "get_task_service",
    "get_team_service",
    "get_upload_service",
    "get_user_service",
]
