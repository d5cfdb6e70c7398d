"""
Activity recording for task mutations.

The task change is committed before its activity entry is written, and the
entry goes out in a commit of its own. If writing the entry fails it is
rolled back and logged, and the already-committed mutation stands.
"""

import uuid

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.logging_config import get_logger
from app.models import ActivityAction, ActivityLog

logger = get_logger(__name__)


def assignment_action(assignee_id: uuid.UUID | None) -> ActivityAction:
    return ActivityAction.ASSIGNED if assignee_id is not None else ActivityAction.UNASSIGNED


async def record_activity(
    session: AsyncSession,
    user_id: uuid.UUID,
    task_id: uuid.UUID,
    action: ActivityAction,
) -> ActivityLog | None:
    """
    Append one activity entry for a task.

    Returns the stored entry, or None if it could not be written.
    """
    await session.commit()

    entry = ActivityLog(user_id=user_id, task_id=task_id, action=action.value)
    session.add(entry)
    try:
        await session.commit()
    except SQLAlchemyError:
        await session.rollback()
        logger.exception(f"Failed to record '{action.value}' activity for task {task_id}")
        return None

    logger.debug(f"Recorded activity: task={task_id} action={action.value} user={user_id}")
    return entry
