from src.taskboard.services.admin_service import AdminService
from src.taskboard.services.auth_service import AuthService
from src.taskboard.services.board_service import BoardService
from src.taskboard.services.message_service import MessageService
from src.taskboard.services.task_service import TaskService
from src.taskboard.services.team_service import TeamService
from src.taskboard.services.upload_service import StoredFile, UploadService
from src.taskboard.services.user_service import UserService

__all__ = [
    "AdminService",
    "AuthService",
    "BoardService",
    "MessageService",
    "StoredFile",
    "TaskService",
    "TeamService",
    "UploadService",
    "UserService",
]
