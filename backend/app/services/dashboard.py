"""
Dashboard aggregation.

Builds a read-only snapshot for one caller from their owned projects:
- Task counts by status, plus overdue tasks (due before now, not completed)
- Tasks assigned to the caller, counted across ALL projects
- Priority histogram with every priority present (zero-filled)
- The 10 most recent activity entries on owned tasks

Each figure comes from its own query, so a snapshot taken while other
requests are writing may mix states.
"""

import uuid
from datetime import datetime

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlmodel import select

from app.logging_config import get_logger
from app.models import ActivityLog, Project, Task, TaskPriority, TaskStatus
from app.schemas import DashboardResponse, DashboardSummary, PriorityStats, RecentActivity
from app.schemas.common import ProjectRef
from app.time_utils import as_utc, utcnow

logger = get_logger(__name__)

RECENT_ACTIVITY_LIMIT = 10


async def _count_tasks(session: AsyncSession, *conditions) -> int:
    query = select(func.count()).select_from(Task).where(*conditions)
    result = await session.execute(query)
    return result.scalar_one()


async def priority_breakdown(session: AsyncSession, project_ids: list[uuid.UUID]) -> PriorityStats:
    """Count tasks per priority within the given projects; absent priorities count 0."""
    query = (
        select(Task.priority, func.count())
        .where(Task.project_id.in_(project_ids))
        .group_by(Task.priority)
    )
    result = await session.execute(query)
    counts = {priority: count for priority, count in result.all()}

    return PriorityStats(**{priority.value: counts.get(priority.value, 0) for priority in TaskPriority})


async def recent_activity(
    session: AsyncSession,
    project_ids: list[uuid.UUID],
    limit: int = RECENT_ACTIVITY_LIMIT,
) -> list[ActivityLog]:
    """Newest activity on tasks in the given projects; same-timestamp entries newest-inserted first."""
    query = (
        select(ActivityLog)
        .join(Task, ActivityLog.task_id == Task.id)
        .where(Task.project_id.in_(project_ids))
        .options(selectinload(ActivityLog.user), selectinload(ActivityLog.task))
        .order_by(ActivityLog.created_at.desc(), ActivityLog.id.desc())
        .limit(limit)
    )
    result = await session.execute(query)
    return list(result.scalars().all())


async def build_dashboard(
    session: AsyncSession,
    user_id: uuid.UUID,
    now: datetime | None = None,
) -> DashboardResponse:
    """
    Compute the dashboard for a user.

    Args:
        session: Database session
        user_id: The caller
        now: Reference time for overdue detection, current UTC time by default (naive values are read as UTC)
    """
    now = as_utc(now) if now is not None else utcnow()

    projects_result = await session.execute(
        select(Project.id, Project.name)
        .where(Project.owner_id == user_id)
        .order_by(Project.created_at.desc())
    )
    projects = [ProjectRef(id=row.id, name=row.name) for row in projects_result.all()]
    project_ids = [project.id for project in projects]

    in_scope = Task.project_id.in_(project_ids)

    summary = DashboardSummary(
        total_projects=len(projects),
        total_tasks=await _count_tasks(session, in_scope),
        pending_tasks=await _count_tasks(session, in_scope, Task.status == TaskStatus.PENDING.value),
        in_progress_tasks=await _count_tasks(session, in_scope, Task.status == TaskStatus.IN_PROGRESS.value),
        completed_tasks=await _count_tasks(session, in_scope, Task.status == TaskStatus.COMPLETED.value),
        # Counted across all projects, not only owned ones
        assigned_to_me=await _count_tasks(session, Task.assignee_id == user_id),
        overdue_tasks=await _count_tasks(
            session,
            in_scope,
            Task.due_date.is_not(None),
            Task.due_date < now,
            Task.status != TaskStatus.COMPLETED.value,
        ),
    )

    activity = await recent_activity(session, project_ids)

    logger.debug(
        f"Dashboard for user={user_id}: projects={summary.total_projects} "
        f"tasks={summary.total_tasks} overdue={summary.overdue_tasks}"
    )

    return DashboardResponse(
        summary=summary,
        priority_stats=await priority_breakdown(session, project_ids),
        recent_activity=[RecentActivity.model_validate(entry) for entry in activity],
        projects=projects,
    )
