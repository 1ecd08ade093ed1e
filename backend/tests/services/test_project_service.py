"""Project Service — owner-scoped operations against a real (SQLite) session.

Invariants:
    - Owner prefixed as member 0 on create
    - update applies only the fields sent and raises on a scoped miss
    - delete of a missing id is a no-op; delete cascades to tasks
    - progress_rates / counts / timeline / titles only see the caller's projects
"""

import logging
from datetime import date

import pytest
from sqlalchemy import func, select

from app.core.errors import InvalidProjectError, ProjectNotFoundError, TaskNotFoundError
from app.models.project_member import ProjectMember
from app.models.task import Task
from app.schemas.project import ProjectCreate, ProjectUpdate
from app.schemas.task import TaskCreate
from app.services.project_service import ProjectService


@pytest.fixture
def service(test_db):
    return ProjectService(test_db)


def _body(**overrides) -> ProjectCreate:
    data = {
        "title": "Launch",
        "start_date": "2026-01-01",
        "end_date": "2026-06-30",
    }
    data.update(overrides)
    return ProjectCreate(**data)


async def _add_tasks(service, project, user, done: int, open_: int):
    for i in range(done):
        await service.add_task(project.id, user.id, TaskCreate(title=f"d{i}", is_done=True))
    for i in range(open_):
        await service.add_task(project.id, user.id, TaskCreate(title=f"o{i}"))


# --- create -------------------------------------------------------------------

async def test_create_prefixes_caller_to_members(service, alice):
    project = await service.create_project(_body(team_members="Bob"), alice)
    assert project.id is not None
    assert project.user_id == alice.id
    assert project.team_members == "Alice,Bob"
    assert project.member_profile == "pic.png,"


async def test_create_without_members_has_only_owner(service, alice):
    project = await service.create_project(_body(), alice)
    assert [m.name for m in project.members] == ["Alice"]
    assert [m.position for m in project.members] == [0]


# --- get / list ---------------------------------------------------------------

async def test_get_returns_none_for_missing_project(service, alice):
    assert await service.get_project(999, alice.id) is None


async def test_list_is_empty_without_projects(service, alice):
    assert await service.list_projects(alice.id) == []


async def test_list_returns_projects_in_id_order(service, alice):
    first = await service.create_project(_body(title="A"), alice)
    second = await service.create_project(_body(title="B"), alice)
    projects = await service.list_projects(alice.id)
    assert [p.id for p in projects] == [first.id, second.id]


# --- update -------------------------------------------------------------------

async def test_update_preserves_fields_not_sent(service, alice):
    project = await service.create_project(
        _body(team_members="Bob", is_shared=True), alice,
    )
    updated = await service.update_project(
        project.id, alice.id, ProjectUpdate(title="X"),
    )
    assert updated.id == project.id
    assert updated.title == "X"
    assert updated.start_date == date(2026, 1, 1)
    assert updated.end_date == date(2026, 6, 30)
    assert updated.is_shared is True
    assert updated.team_members == "Alice,Bob"


async def test_update_missing_project_raises(service, alice):
    with pytest.raises(ProjectNotFoundError):
        await service.update_project(999, alice.id, ProjectUpdate(title="X"))


async def test_update_members_keeps_owner_first(service, alice):
    project = await service.create_project(_body(team_members="Bob,Carol"), alice)
    updated = await service.update_project(
        project.id, alice.id, ProjectUpdate(team_members="Dave"),
    )
    assert updated.team_members == "Alice,Dave"


async def test_update_members_can_grow_and_shrink(service, alice, test_db):
    project = await service.create_project(_body(team_members="Bob"), alice)
    await service.update_project(
        project.id, alice.id,
        ProjectUpdate(members=[{"name": "B"}, {"name": "C"}, {"name": "D"}]),
    )
    shrunk = await service.update_project(
        project.id, alice.id, ProjectUpdate(members=[]),
    )
    assert shrunk.team_members == "Alice"
    count = await test_db.execute(
        select(func.count(ProjectMember.id))
        .where(ProjectMember.project_id == project.id),
    )
    assert count.scalar_one() == 1


async def test_update_rejects_end_date_before_stored_start(service, alice):
    project = await service.create_project(_body(), alice)
    with pytest.raises(InvalidProjectError):
        await service.update_project(
            project.id, alice.id, ProjectUpdate(end_date="2025-12-31"),
        )


# --- toggle / delete ----------------------------------------------------------

async def test_toggle_twice_restores_flag(service, alice):
    project = await service.create_project(_body(), alice)
    first = await service.toggle_shared(project.id, alice.id)
    assert first.is_shared is True
    second = await service.toggle_shared(project.id, alice.id)
    assert second.is_shared is False


async def test_toggle_missing_project_raises(service, alice):
    with pytest.raises(ProjectNotFoundError):
        await service.toggle_shared(999, alice.id)


async def test_delete_missing_project_is_noop(service, alice):
    keep = await service.create_project(_body(), alice)
    await service.delete_project(999, alice.id)
    assert [p.id for p in await service.list_projects(alice.id)] == [keep.id]


async def test_delete_cascades_to_tasks_and_members(service, alice, test_db):
    project = await service.create_project(_body(team_members="Bob"), alice)
    await _add_tasks(service, project, alice, done=1, open_=2)

    await service.delete_project(project.id, alice.id)

    tasks = await test_db.execute(
        select(func.count(Task.id)).where(Task.project_id == project.id),
    )
    members = await test_db.execute(
        select(func.count(ProjectMember.id))
        .where(ProjectMember.project_id == project.id),
    )
    assert tasks.scalar_one() == 0
    assert members.scalar_one() == 0


# --- aggregates ---------------------------------------------------------------

async def test_progress_rates_in_project_order(service, alice):
    empty = await service.create_project(_body(title="Empty"), alice)
    third = await service.create_project(_body(title="Third"), alice)
    done = await service.create_project(_body(title="Done"), alice)
    await _add_tasks(service, third, alice, done=1, open_=2)
    await _add_tasks(service, done, alice, done=2, open_=0)

    rates = await service.progress_rates(alice.id)

    assert rates == [
        {"project_id": empty.id, "progress_rate": 0},
        {"project_id": third.id, "progress_rate": 34},
        {"project_id": done.id, "progress_rate": 100},
    ]


async def test_progress_rates_ignore_other_users(service, alice, bob):
    await service.create_project(_body(), bob)
    assert await service.progress_rates(alice.id) == []


async def test_counts_split_on_reference_date(service, alice):
    today = date(2026, 3, 1)
    await service.create_project(_body(end_date="2026-03-02"), alice)
    await service.create_project(_body(end_date="2026-03-01"), alice)
    await service.create_project(_body(end_date="2026-02-01"), alice)

    counts = await service.counts(alice.id, today=today)

    assert counts == {"in_progress": 1, "completed": 2}


async def test_timeline_and_titles_project_columns(service, alice):
    project = await service.create_project(_body(title="Launch"), alice)
    assert await service.timeline(alice.id) == [{
        "id": project.id,
        "title": "Launch",
        "start_date": date(2026, 1, 1),
        "end_date": date(2026, 6, 30),
    }]
    assert await service.titles(alice.id) == [{"id": project.id, "title": "Launch"}]


async def test_shared_lists_only_flagged_projects(service, alice):
    await service.create_project(_body(title="Private"), alice)
    shared = await service.create_project(_body(title="Public", is_shared=True), alice)
    assert [p.id for p in await service.list_shared(alice.id)] == [shared.id]


# --- tasks --------------------------------------------------------------------

async def test_set_task_done_flips_progress(service, alice):
    project = await service.create_project(_body(), alice)
    task = await service.add_task(project.id, alice.id, TaskCreate(title="Ship"))
    await service.set_task_done(project.id, task.id, alice.id, True)
    assert await service.progress_rates(alice.id) == [
        {"project_id": project.id, "progress_rate": 100},
    ]


async def test_task_from_other_project_not_found(service, alice):
    one = await service.create_project(_body(), alice)
    two = await service.create_project(_body(), alice)
    task = await service.add_task(one.id, alice.id, TaskCreate(title="Ship"))
    with pytest.raises(TaskNotFoundError):
        await service.set_task_done(two.id, task.id, alice.id, True)


async def test_set_task_done_logs_with_task_context(service, alice, caplog):
    project = await service.create_project(_body(), alice)
    task = await service.add_task(project.id, alice.id, TaskCreate(title="Ship"))

    with caplog.at_level(logging.INFO, logger="app.services.project_service"):
        await service.set_task_done(project.id, task.id, alice.id, True)

    record = caplog.records[-1]
    assert record.task_id == task.id
    assert record.project_id == project.id
    assert record.user_id == alice.id


async def test_update_names_only_keeps_stored_profiles(service, alice):
    project = await service.create_project(
        _body(team_members="Bob,Carol", member_profile="b.png,c.png"), alice,
    )
    updated = await service.update_project(
        project.id, alice.id, ProjectUpdate(team_members="Bob"),
    )
    assert updated.team_members == "Alice,Bob"
    assert updated.member_profile == "pic.png,b.png"
