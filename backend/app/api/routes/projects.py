"""Project Routes — HTTP mapping for owner-scoped project CRUD and aggregates.

Invariants:
    - Every route declares get_current_user explicitly (status toggle included)
    - Caller identity comes from the bearer token only, never from path/body
    - Fixed paths (progress-rate, timeline, counts, titles, shared) are registered
      before /{project_id} so they are never parsed as ids
    - Routes never contain business logic (delegate to ProjectService)

Design Decisions:
    - A missing/foreign project raises ProjectNotFoundError; the global handler
      renders the 404 envelope
    - DELETE always answers 204, whether or not a row matched
"""

import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import ProjectId, UserId
from app.core.errors import ProjectNotFoundError
from app.infrastructure.auth import get_current_user
from app.infrastructure.database import get_db
from app.models.user import User
from app.schemas.project import (
    ProgressRateResponse,
    ProjectCounts,
    ProjectCreate,
    ProjectResponse,
    ProjectTitle,
    ProjectUpdate,
    TimelineEntry,
)
from app.services.project_service import ProjectService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/projects", tags=["projects"])


def get_project_service(db: AsyncSession = Depends(get_db)) -> ProjectService:
    return ProjectService(db)


@router.post(
    "", response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_project(
    body: ProjectCreate,
    caller: User = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
):
    """Create a project owned by the caller."""
    return await service.create_project(body, caller)


@router.get("", response_model=list[ProjectResponse])
async def list_projects(
    caller: User = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
):
    return await service.list_projects(UserId(caller.id))


@router.get("/progress-rate", response_model=list[ProgressRateResponse])
async def get_progress_rate(
    caller: User = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
):
    """Completion percentage of every owned project."""
    return await service.progress_rates(UserId(caller.id))


@router.get("/timeline", response_model=list[TimelineEntry])
async def get_timeline(
    caller: User = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
):
    return await service.timeline(UserId(caller.id))


@router.get("/counts", response_model=ProjectCounts)
async def get_counts(
    caller: User = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
):
    """In-progress vs completed, evaluated against today's date."""
    return await service.counts(UserId(caller.id))


@router.get("/titles", response_model=list[ProjectTitle])
async def get_titles(
    caller: User = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
):
    return await service.titles(UserId(caller.id))


@router.get("/shared", response_model=list[ProjectResponse])
async def get_shared(
    caller: User = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
):
    return await service.list_shared(UserId(caller.id))


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: int,
    caller: User = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
):
    project = await service.get_project(ProjectId(project_id), UserId(caller.id))
    if project is None:
        raise ProjectNotFoundError(project_id, caller.id)
    return project


@router.patch("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: int,
    body: ProjectUpdate,
    caller: User = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
):
    """Partial update — absent fields keep their stored values."""
    return await service.update_project(
        ProjectId(project_id), UserId(caller.id), body,
    )


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: int,
    caller: User = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
):
    await service.delete_project(ProjectId(project_id), UserId(caller.id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{project_id}/status", response_model=ProjectResponse)
async def toggle_shared(
    project_id: int,
    caller: User = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
):
    """Flip the shared flag."""
    return await service.toggle_shared(ProjectId(project_id), UserId(caller.id))
