from src.taskboard.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisteredUser,
    RegisterRequest,
    RegisterResponse,
    ResetPasswordRequest,
    SessionUser,
)
from src.taskboard.schemas.base import APIModel, MessageResponse, OkMessageResponse, OkResponse
from src.taskboard.schemas.board import BoardCreate, BoardRead, BoardShareRequest, BoardUpdate
from src.taskboard.schemas.message import MessageCreate, MessageRead
from src.taskboard.schemas.task import (
    AttachmentRead,
    CommentCreate,
    CommentRead,
    SubTaskSchema,
    TaskCreate,
    TaskRead,
    TaskUpdate,
)
from src.taskboard.schemas.team import (
    TeamCreate,
    TeamJoinResponse,
    TeamMemberRead,
    TeamRead,
    TeamResponse,
    TeamSettingsSchema,
)
from src.taskboard.schemas.user import (
    AdminUserCreate,
    AdminUserRead,
    AdminUserUpdate,
    AvatarResponse,
    PasswordChangeRequest,
    ProfileUpdate,
    ProfileUpdateResponse,
    PublicUser,
    UserProfile,
    UserStatsRead,
)

__all__ = [
    "APIModel",
    "AdminUserCreate",
    "AdminUserRead",
    "AdminUserUpdate",
    "AttachmentRead",
    "AvatarResponse",
    "BoardCreate",
    "BoardRead",
    "BoardShareRequest",
    "BoardUpdate",
    "CommentCreate",
    "CommentRead",
    "LoginRequest",
    "LoginResponse",
    "MessageCreate",
    "MessageRead",
    "MessageResponse",
    "OkMessageResponse",
    "OkResponse",
    "PasswordChangeRequest",
    "ProfileUpdate",
    "ProfileUpdateResponse",
    "PublicUser",
    "RegisterRequest",
    "RegisterResponse",
    "RegisteredUser",
    "ResetPasswordRequest",
    "SessionUser",
    "SubTaskSchema",
    "TaskCreate",
    "TaskRead",
    "TaskUpdate",
    "TeamCreate",
    "TeamJoinResponse",
    "TeamMemberRead",
    "TeamRead",
    "TeamResponse",
    "TeamSettingsSchema",
    "UserProfile",
    "UserStatsRead",
]
