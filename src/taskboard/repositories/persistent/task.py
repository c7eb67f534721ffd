from src.taskboard.models import Task, TaskRecord
from src.taskboard.repositories.base import TaskRepository
from src.taskboard.repositories.persistent.base import SQLRepository


class SQLTaskRepository(SQLRepository[Task, TaskRecord], TaskRepository):
    record = TaskRecord
    json_fields = frozenset({"assigned_to", "sub_tasks", "comments", "attachments"})
