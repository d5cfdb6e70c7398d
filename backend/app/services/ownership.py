"""
Ownership-scoped access to projects and tasks.

A caller only ever sees projects whose owner_id is their own id, and tasks
whose project they own. Lookups apply the ownership predicate inside the
query itself, so "does not exist" and "belongs to someone else" produce the
same NotFoundError with no extra round trip that could tell them apart.
"""

import uuid
from typing import Any

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlmodel import select

from app.exceptions import NotFoundError
from app.logging_config import get_logger
from app.models import ActivityLog, Project, Task, TaskStatus, User
from app.time_utils import as_utc, utcnow

logger = get_logger(__name__)

# Fields a task patch may touch; project and ownership are fixed at creation
TASK_PATCH_FIELDS = {"title", "description", "status", "priority", "due_date"}
NON_NULLABLE_TASK_FIELDS = {"title", "status", "priority"}


def _task_loaders() -> list:
    return [
        selectinload(Task.project),
        selectinload(Task.assignee),
    ]


def owned_projects_query(owner_id: uuid.UUID):
    return select(Project).where(Project.owner_id == owner_id)


def owned_tasks_query(owner_id: uuid.UUID):
    return select(Task).join(Project, Task.project_id == Project.id).where(Project.owner_id == owner_id)


# =============================================================================
# Projects
# =============================================================================

async def find_owned_project(
    session: AsyncSession,
    project_id: uuid.UUID,
    owner_id: uuid.UUID,
    with_tasks: bool = False,
) -> Project:
    """
    Fetch a project owned by the caller.

    Raises:
        NotFoundError: If the project does not exist or is owned by someone else.
    """
    query = owned_projects_query(owner_id).where(Project.id == project_id).options(
        selectinload(Project.owner)
    )
    if with_tasks:
        query = query.options(selectinload(Project.tasks).selectinload(Task.assignee))

    result = await session.execute(query.execution_options(populate_existing=True))
    project = result.scalars().first()
    if project is None:
        raise NotFoundError("Project")
    return project


async def list_owned_projects(session: AsyncSession, owner_id: uuid.UUID) -> list[Project]:
    """All projects owned by the caller, newest first, with their task digests."""
    query = (
        owned_projects_query(owner_id)
        .options(selectinload(Project.owner), selectinload(Project.tasks))
        .order_by(Project.created_at.desc())
    )
    result = await session.execute(query)
    projects = list(result.scalars().all())

    logger.debug(f"Listed {len(projects)} projects for owner={owner_id}")
    return projects


async def create_project(session: AsyncSession, owner_id: uuid.UUID, data: dict[str, Any]) -> Project:
    """Create a project owned by the caller."""
    project = Project(**data, owner_id=owner_id)
    session.add(project)
    await session.flush()

    logger.info(f"Created project: id={project.id} name='{project.name}' owner={owner_id}")
    return await find_owned_project(session, project.id, owner_id)


async def update_project(
    session: AsyncSession,
    project_id: uuid.UUID,
    owner_id: uuid.UUID,
    data: dict[str, Any],
) -> Project:
    """Apply a patch to an owned project."""
    project = await find_owned_project(session, project_id, owner_id)

    logger.info(f"Updating project {project_id}: {data}")

    for field, value in data.items():
        setattr(project, field, value)
    project.updated_at = utcnow()

    await session.flush()
    return await find_owned_project(session, project_id, owner_id)


async def delete_project(session: AsyncSession, project_id: uuid.UUID, owner_id: uuid.UUID) -> None:
    """Delete an owned project together with its tasks and their activity."""
    project = await find_owned_project(session, project_id, owner_id)

    logger.info(f"Deleting project {project_id}: '{project.name}'")

    task_ids = select(Task.id).where(Task.project_id == project_id)
    await session.execute(delete(ActivityLog).where(ActivityLog.task_id.in_(task_ids)))
    await session.execute(delete(Task).where(Task.project_id == project_id))
    await session.execute(delete(Project).where(Project.id == project_id))
    await session.flush()


# =============================================================================
# Tasks
# =============================================================================

async def find_owned_task(
    session: AsyncSession,
    task_id: uuid.UUID,
    owner_id: uuid.UUID,
    with_activity: bool = False,
) -> Task:
    """
    Fetch a task whose project is owned by the caller.

    Raises:
        NotFoundError: If the task does not exist or sits in someone else's project.
    """
    query = owned_tasks_query(owner_id).where(Task.id == task_id).options(*_task_loaders())
    if with_activity:
        query = query.options(selectinload(Task.activity_logs).selectinload(ActivityLog.user))

    result = await session.execute(query.execution_options(populate_existing=True))
    task = result.scalars().first()
    if task is None:
        raise NotFoundError("Task")

    if with_activity:
        task.activity_logs.sort(key=lambda entry: (as_utc(entry.created_at), entry.id), reverse=True)
    return task


async def list_owned_tasks(
    session: AsyncSession,
    owner_id: uuid.UUID,
    project_id: uuid.UUID | None = None,
    status: str | None = None,
    assignee_id: uuid.UUID | None = None,
) -> list[Task]:
    """
    Tasks in the caller's projects, newest first.

    The optional filters narrow the owned set; they are combined with AND.
    """
    query = owned_tasks_query(owner_id).options(*_task_loaders())
    if project_id:
        query = query.where(Task.project_id == project_id)
    if status:
        query = query.where(Task.status == status)
    if assignee_id:
        query = query.where(Task.assignee_id == assignee_id)

    result = await session.execute(query.order_by(Task.created_at.desc()))
    tasks = list(result.scalars().all())

    logger.debug(
        f"Listed {len(tasks)} tasks for owner={owner_id} "
        f"(project={project_id}, status={status}, assignee={assignee_id})"
    )
    return tasks


async def create_task(session: AsyncSession, owner_id: uuid.UUID, data: dict[str, Any]) -> Task:
    """
    Create a task in one of the caller's projects.

    Raises:
        NotFoundError: If the target project is not owned by the caller.
    """
    project = await find_owned_project(session, data["project_id"], owner_id)

    task = Task(**data)
    session.add(task)
    await session.flush()

    logger.info(f"Created task: id={task.id} title='{task.title}' project={project.id}")
    return task


async def update_task(
    session: AsyncSession,
    task_id: uuid.UUID,
    owner_id: uuid.UUID,
    data: dict[str, Any],
) -> Task:
    """Apply a patch to an owned task. Nulls for required fields are ignored."""
    task = await find_owned_task(session, task_id, owner_id)

    patch = {
        field: value
        for field, value in data.items()
        if field in TASK_PATCH_FIELDS and not (value is None and field in NON_NULLABLE_TASK_FIELDS)
    }
    logger.info(f"Updating task {task_id}: {patch}")

    for field, value in patch.items():
        setattr(task, field, value)
    task.updated_at = utcnow()

    await session.flush()
    return task


async def assign_task(
    session: AsyncSession,
    task_id: uuid.UUID,
    owner_id: uuid.UUID,
    assignee_id: uuid.UUID | None,
) -> Task:
    """
    Set or clear a task's assignee.

    Any existing user may be assigned, not just the project owner.

    Raises:
        NotFoundError: "Task not found" if the task is not owned by the caller,
            "Assignee not found" if the assignee id matches no user.
    """
    task = await find_owned_task(session, task_id, owner_id)

    if assignee_id is not None:
        assignee = await session.get(User, assignee_id)
        if assignee is None:
            raise NotFoundError("Assignee")

    logger.info(f"Assigning task {task_id} to {assignee_id}")

    task.assignee_id = assignee_id
    task.updated_at = utcnow()
    await session.flush()
    return task


async def complete_task(session: AsyncSession, task_id: uuid.UUID, owner_id: uuid.UUID) -> Task:
    """Mark an owned task completed."""
    task = await find_owned_task(session, task_id, owner_id)

    logger.info(f"Completing task {task_id}")

    task.status = TaskStatus.COMPLETED.value
    task.updated_at = utcnow()
    await session.flush()
    return task


async def delete_task(session: AsyncSession, task_id: uuid.UUID, owner_id: uuid.UUID) -> None:
    """Delete an owned task and its activity entries."""
    task = await find_owned_task(session, task_id, owner_id)

    logger.info(f"Deleting task {task_id}: '{task.title}'")

    await session.execute(delete(ActivityLog).where(ActivityLog.task_id == task_id))
    await session.execute(delete(Task).where(Task.id == task_id))
    await session.flush()
