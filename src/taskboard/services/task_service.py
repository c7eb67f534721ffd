"""Task service - team-scoped task CRUD with board fan-out."""

from typing import Any

from fastapi import UploadFile

from src.taskboard.core.config import Settings
from src.taskboard.core.exceptions import InvalidTaskIdError, NotFoundError, ValidationError
from src.taskboard.core.logging import get_logger
from src.taskboard.core.security import is_valid_entity_id
from src.taskboard.models import Attachment, Comment, Principal, SubTask, Task
from src.taskboard.realtime import TEAM_BOARD_UPDATE, RealtimeHub, team_board_room
from src.taskboard.repositories import Repositories
from src.taskboard.schemas.task import SubTaskSchema, TaskCreate, TaskRead, TaskUpdate
from src.taskboard.services.upload_service import UploadService

logger = get_logger(__name__)

# Fields that may be cleared by sending null
_NULLABLE_FIELDS = frozenset({"due_date"})


def _sub_tasks(items: list[SubTaskSchema]) -> list[SubTask]:
    return [
        SubTask(text=item.text, completed=item.completed)
        if not item.id
        else SubTask(id=item.id, text=item.text, completed=item.completed)
        for item in items
    ]


class TaskService:
    """Tasks are visible to any authenticated user who knows the team id.

    Every mutation is published to the team's board room as
    `teamBoard:update` with either `{task}` or `{deletedTaskId}`.
    """

    def __init__(
        self,
        repos: Repositories,
        hub: RealtimeHub,
        settings: Settings,
        uploads: UploadService,
    ):
        self.repos = repos
        self.hub = hub
        self.settings = settings
        self.uploads = uploads

    async def _publish_task(self, task: Task) -> None:
        await self.hub.publish(
            team_board_room(task.team_id),
            TEAM_BOARD_UPDATE,
            {"task": TaskRead.payload(task)},
        )

    async def _get(self, task_id: str) -> Task:
        if not is_valid_entity_id(task_id):
            raise InvalidTaskIdError()
        task = await self.repos.tasks.get_by_id(task_id)
        if task is None:
            raise NotFoundError("Task not found")
        return task

    async def list_for_team(self, team_id: str) -> list[Task]:
        return await self.repos.tasks.list_by_team(team_id)

    async def create(self, principal: Principal, team_id: str, data: TaskCreate) -> Task:
        if not is_valid_entity_id(team_id):
            raise ValidationError("Invalid team ID")

        fields = data.model_dump(exclude={"sub_tasks"})
        task = await self.repos.tasks.create(
            Task(
                **fields,
                team_id=team_id,
                sub_tasks=_sub_tasks(data.sub_tasks),
                created_by=principal.id,
            )
        )
        await self._publish_task(task)
        logger.info("Task created", task_id=task.id, team_id=team_id)
        return task

    async def update(self, task_id: str, data: TaskUpdate) -> Task:
        """Merge the fields present in `data`; last write wins."""
        await self._get(task_id)

        patch: dict[str, Any] = {}
        for field, value in data.model_dump(exclude_unset=True).items():
            if value is None and field not in _NULLABLE_FIELDS:
                continue
            patch[field] = value
        if data.sub_tasks is not None:
            patch["sub_tasks"] = _sub_tasks(data.sub_tasks)

        task = await self.repos.tasks.update(task_id, patch)
        await self._publish_task(task)
        return task

    async def delete(self, task_id: str) -> None:
        task = await self._get(task_id)
        await self.repos.tasks.delete(task.id)
        await self.hub.publish(
            team_board_room(task.team_id),
            TEAM_BOARD_UPDATE,
            {"deletedTaskId": task.id},
        )
        logger.info("Task deleted", task_id=task.id)

    async def add_comment(self, principal: Principal, task_id: str, text: str) -> Task:
        if not text.strip():
            raise ValidationError("Comment text is required")

        task = await self._get(task_id)
        comment = Comment(author_id=principal.id, text=text.strip())
        task = await self.repos.tasks.update(
            task.id, {"comments": [*task.comments, comment]}
        )
        await self._publish_task(task)
        return task

    async def add_attachment(
        self, principal: Principal, task_id: str, upload: UploadFile | None
    ) -> Task:
        if upload is None or not upload.filename:
            raise ValidationError("No file uploaded.")

        task = await self._get(task_id)
        stored = await self.uploads.save(
            upload, prefix="attachment", max_bytes=self.settings.attachment_max_bytes
        )
        attachment = Attachment(
            name=stored.original_name,
            url=stored.url,
            type=stored.content_type,
            size=stored.size,
        )
        task = await self.repos.tasks.update(
            task.id, {"attachments": [*task.attachments, attachment]}
        )
        await self._publish_task(task)
        logger.info("Attachment added", task_id=task.id, uploaded_by=principal.id)
        return task
