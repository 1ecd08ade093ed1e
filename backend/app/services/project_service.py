"""Project Service — owner-scoped reads, writes and aggregates over projects and tasks.

Invariants:
    - Every project query filters by user_id == caller; foreign projects look missing
    - update and toggle_shared raise ProjectNotFoundError on a scoped miss
    - delete of a missing/foreign project is a silent no-op
    - Member position 0 is the owner and survives every update
    - progress_rates is one grouped query, ordered by project id

Design Decisions:
    - Plain class over AsyncSession (same seam as the other handler classes): routes
      build one per request through get_project_service
    - Members synced in place by position: avoids insert-before-delete collisions on
      the (project_id, position) unique constraint
    - Read-modify-write without row locks: concurrent writers are last-write-wins
"""

import logging
from datetime import date, datetime, timezone

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import CallerLike, Member, ProjectId, TaskId, UserId
from app.core.errors import (
    ErrorContext, InvalidProjectError, ProjectNotFoundError, TaskNotFoundError,
)
from app.core.members import with_owner_first
from app.core.progress import progress_rate
from app.models.project import Project
from app.models.project_member import ProjectMember
from app.models.task import Task
from app.schemas.project import ProjectCreate, ProjectUpdate
from app.schemas.task import TaskCreate

logger = logging.getLogger(__name__)


def _today() -> date:
    return datetime.now(timezone.utc).date()


class ProjectService:
    """Project access layer — one instance per request/session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Lookups ────────────────────────────────────────────────

    def _owned(self, user_id: UserId):
        return select(Project).where(Project.user_id == user_id)

    async def get_project(
        self, project_id: ProjectId, user_id: UserId,
    ) -> Project | None:
        """Project by id, or None when absent or owned by someone else."""
        result = await self.db.execute(
            self._owned(user_id).where(Project.id == project_id),
        )
        return result.scalar_one_or_none()

    async def _get_project_or_raise(
        self, project_id: ProjectId, user_id: UserId,
    ) -> Project:
        project = await self.get_project(project_id, user_id)
        if project is None:
            raise ProjectNotFoundError(project_id, user_id)
        return project

    async def list_projects(self, user_id: UserId) -> list[Project]:
        result = await self.db.execute(
            self._owned(user_id).order_by(Project.id),
        )
        return list(result.scalars().all())

    async def list_shared(self, user_id: UserId) -> list[Project]:
        result = await self.db.execute(
            self._owned(user_id)
            .where(Project.is_shared.is_(True))
            .order_by(Project.id),
        )
        return list(result.scalars().all())

    # ─── Writes ─────────────────────────────────────────────────

    async def create_project(
        self, body: ProjectCreate, caller: CallerLike,
    ) -> Project:
        """Persist a project owned by `caller`, caller prefixed as member 0."""
        members = with_owner_first(caller, body.requested_members() or [])
        project = Project(
            user_id=caller.id,
            title=body.title,
            start_date=body.start_date,
            end_date=body.end_date,
            is_shared=body.is_shared,
            members=[
                ProjectMember(
                    position=i, name=m.name, profile_image=m.profile_image,
                )
                for i, m in enumerate(members)
            ],
        )
        self.db.add(project)
        await self.db.commit()
        logger.info(
            "Project created",
            extra={"user_id": caller.id, "project_id": project.id},
        )
        return project

    async def update_project(
        self, project_id: ProjectId, user_id: UserId, body: ProjectUpdate,
    ) -> Project:
        """Apply the fields present in `body`; id and owner never change."""
        project = await self._get_project_or_raise(project_id, user_id)

        changes = body.column_changes()
        start = changes.get("start_date", project.start_date)
        end = changes.get("end_date", project.end_date)
        if end < start:
            raise InvalidProjectError(
                "end_date cannot precede start_date", "end_date",
                ErrorContext(user_id=user_id, project_id=project_id),
            )
        for field, value in changes.items():
            setattr(project, field, value)

        owner, *rest = project.member_list
        requested = body.requested_members(rest)
        if requested is not None:
            self._sync_members(project, [owner, *requested])

        await self.db.commit()
        logger.info(
            "Project updated",
            extra={"user_id": user_id, "project_id": project_id},
        )
        return project

    def _sync_members(self, project: Project, members: list[Member]) -> None:
        current = project.members
        for position, member in enumerate(members):
            if position < len(current):
                current[position].name = member.name
                current[position].profile_image = member.profile_image
            else:
                current.append(ProjectMember(
                    position=position,
                    name=member.name,
                    profile_image=member.profile_image,
                ))
        del current[len(members):]

    async def toggle_shared(
        self, project_id: ProjectId, user_id: UserId,
    ) -> Project:
        project = await self._get_project_or_raise(project_id, user_id)
        project.is_shared = not project.is_shared
        await self.db.commit()
        logger.info(
            f"Project shared flag set to {project.is_shared}",
            extra={"user_id": user_id, "project_id": project_id},
        )
        return project

    async def delete_project(
        self, project_id: ProjectId, user_id: UserId,
    ) -> None:
        """Hard delete with cascade to members and tasks. Missing is a no-op."""
        project = await self.get_project(project_id, user_id)
        if project is None:
            return
        await self.db.delete(project)
        await self.db.commit()
        logger.info(
            "Project deleted",
            extra={"user_id": user_id, "project_id": project_id},
        )

    # ─── Aggregates ─────────────────────────────────────────────

    async def progress_rates(self, user_id: UserId) -> list[dict]:
        """Completion percentage per owned project, from one grouped query."""
        done = func.coalesce(
            func.sum(case((Task.is_done.is_(True), 1), else_=0)), 0,
        )
        result = await self.db.execute(
            select(Project.id, func.count(Task.id), done)
            .outerjoin(Task, Task.project_id == Project.id)
            .where(Project.user_id == user_id)
            .group_by(Project.id)
            .order_by(Project.id),
        )
        return [
            {"project_id": pid, "progress_rate": progress_rate(done_count, total)}
            for pid, total, done_count in result.all()
        ]

    async def timeline(self, user_id: UserId) -> list[dict]:
        result = await self.db.execute(
            select(
                Project.id, Project.title, Project.start_date, Project.end_date,
            )
            .where(Project.user_id == user_id)
            .order_by(Project.id),
        )
        return [dict(row._mapping) for row in result.all()]

    async def titles(self, user_id: UserId) -> list[dict]:
        result = await self.db.execute(
            select(Project.id, Project.title)
            .where(Project.user_id == user_id)
            .order_by(Project.id),
        )
        return [dict(row._mapping) for row in result.all()]

    async def counts(
        self, user_id: UserId, today: date | None = None,
    ) -> dict[str, int]:
        """In-progress (ends after today) vs completed (ends today or earlier)."""
        today = today or _today()
        in_progress = await self._count_owned(
            user_id, Project.end_date > today,
        )
        completed = await self._count_owned(
            user_id, Project.end_date <= today,
        )
        return {"in_progress": in_progress, "completed": completed}

    async def _count_owned(self, user_id: UserId, condition) -> int:
        result = await self.db.execute(
            select(func.count(Project.id))
            .where(Project.user_id == user_id)
            .where(condition),
        )
        return result.scalar_one()

    # ─── Tasks ──────────────────────────────────────────────────

    async def add_task(
        self, project_id: ProjectId, user_id: UserId, body: TaskCreate,
    ) -> Task:
        await self._get_project_or_raise(project_id, user_id)
        task = Task(project_id=project_id, title=body.title, is_done=body.is_done)
        self.db.add(task)
        await self.db.commit()
        logger.info(
            "Task added",
            extra={"user_id": user_id, "project_id": project_id, "task_id": task.id},
        )
        return task

    async def list_tasks(
        self, project_id: ProjectId, user_id: UserId,
    ) -> list[Task]:
        await self._get_project_or_raise(project_id, user_id)
        result = await self.db.execute(
            select(Task).where(Task.project_id == project_id).order_by(Task.id),
        )
        return list(result.scalars().all())

    async def set_task_done(
        self,
        project_id: ProjectId,
        task_id: TaskId,
        user_id: UserId,
        is_done: bool,
    ) -> Task:
        await self._get_project_or_raise(project_id, user_id)
        result = await self.db.execute(
            select(Task)
            .where(Task.id == task_id)
            .where(Task.project_id == project_id),
        )
        task = result.scalar_one_or_none()
        if task is None:
            raise TaskNotFoundError(task_id, project_id, user_id)
        task.is_done = is_done
        await self.db.commit()
        logger.info(
            f"Task done flag set to {is_done}",
            extra={"user_id": user_id, "project_id": project_id, "task_id": task_id},
        )
        return task
