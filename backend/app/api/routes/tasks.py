"""Task Routes — tasks nested under an owned project.

Invariants:
    - Project ownership checked before any task is read or written
    - A task id outside the given project is a 404, even if it exists elsewhere
"""

from fastapi import APIRouter, Depends, status

from app.api.routes.projects import get_project_service
from app.core.domain_types import ProjectId, TaskId, UserId
from app.infrastructure.auth import get_current_user
from app.models.user import User
from app.schemas.task import TaskCreate, TaskResponse, TaskUpdate
from app.services.project_service import ProjectService

router = APIRouter(prefix="/projects/{project_id}/tasks", tags=["tasks"])


@router.post(
    "", response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_task(
    project_id: int,
    body: TaskCreate,
    caller: User = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
):
    return await service.add_task(ProjectId(project_id), UserId(caller.id), body)


@router.get("", response_model=list[TaskResponse])
async def list_tasks(
    project_id: int,
    caller: User = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
):
    return await service.list_tasks(ProjectId(project_id), UserId(caller.id))


@router.patch("/{task_id}", response_model=TaskResponse)
async def set_task_done(
    project_id: int,
    task_id: int,
    body: TaskUpdate,
    caller: User = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
):
    """Mark a task done or not done."""
    return await service.set_task_done(
        ProjectId(project_id), TaskId(task_id), UserId(caller.id), body.is_done,
    )
