"""Task endpoints, scoped by team id. Mutations fan out to `teamBoard:<teamId>`."""

from typing import Annotated

from fastapi import APIRouter, File, UploadFile, status

from src.taskboard.api.dependencies import CurrentPrincipal, TaskServiceDep
from src.taskboard.schemas.base import OkResponse
from src.taskboard.schemas.task import CommentCreate, TaskCreate, TaskRead, TaskUpdate

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("/team/{team_id}", response_model=list[TaskRead])
async def list_team_tasks(
    team_id: str, principal: CurrentPrincipal, service: TaskServiceDep
) -> list[TaskRead]:
    tasks = await service.list_for_team(team_id)
    return [TaskRead.model_validate(task) for task in tasks]


@router.post(
    "/team/{team_id}",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Invalid input"}},
)
async def create_task(
    team_id: str, data: TaskCreate, principal: CurrentPrincipal, service: TaskServiceDep
) -> TaskRead:
    task = await service.create(principal, team_id, data)
    return TaskRead.model_validate(task)


@router.put(
    "/{task_id}",
    response_model=TaskRead,
    responses={
        400: {"description": "Invalid task ID"},
        404: {"description": "Task not found"},
    },
)
async def update_task(
    task_id: str, data: TaskUpdate, principal: CurrentPrincipal, service: TaskServiceDep
) -> TaskRead:
    task = await service.update(task_id, data)
    return TaskRead.model_validate(task)


@router.delete(
    "/{task_id}",
    response_model=OkResponse,
    responses={
        400: {"description": "Invalid task ID"},
        404: {"description": "Task not found"},
    },
)
async def delete_task(
    task_id: str, principal: CurrentPrincipal, service: TaskServiceDep
) -> OkResponse:
    await service.delete(task_id)
    return OkResponse()


@router.post(
    "/{task_id}/comments",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    task_id: str, data: CommentCreate, principal: CurrentPrincipal, service: TaskServiceDep
) -> TaskRead:
    task = await service.add_comment(principal, task_id, data.text)
    return TaskRead.model_validate(task)


@router.post(
    "/{task_id}/attachments",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "No file uploaded"},
        413: {"description": "Attachment larger than 10 MB"},
    },
)
async def add_attachment(
    task_id: str,
    principal: CurrentPrincipal,
    service: TaskServiceDep,
    file: Annotated[UploadFile | None, File()] = None,
) -> TaskRead:
    task = await service.add_attachment(principal, task_id, file)
    return TaskRead.model_validate(task)
