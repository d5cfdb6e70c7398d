"""
Task routes for the Smart Task Manager API.

Tasks are reachable only through projects the caller owns. Each mutation
leaves one entry in the task's activity log.
"""

import uuid
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import get_current_user
from app.database import get_session
from app.models import ActivityAction, TaskStatus, User
from app.schemas import (
    MessageResponse,
    TaskAssign,
    TaskCreate,
    TaskDetail,
    TaskDetailResponse,
    TaskListResponse,
    TaskRead,
    TaskResponse,
    TaskUpdate,
)
from app.services import ownership
from app.services.activity import assignment_action, record_activity

router = APIRouter()


async def _task_response(
    session: AsyncSession,
    task_id: uuid.UUID,
    owner_id: uuid.UUID,
    message: str,
) -> TaskResponse:
    task = await ownership.find_owned_task(session, task_id, owner_id)
    return TaskResponse(message=message, task=TaskRead.model_validate(task))


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    task_in: TaskCreate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> TaskResponse:
    """
    Create a task in one of the caller's projects.

    Returns 404 if the project does not exist or belongs to someone else.
    """
    user_id = current_user.id
    task = await ownership.create_task(session, user_id, task_in.model_dump())
    task_id = task.id
    await record_activity(session, user_id, task_id, ActivityAction.CREATED)
    return await _task_response(session, task_id, user_id, "Task created successfully")


@router.get("", response_model=TaskListResponse)
async def list_tasks(
    project_id: uuid.UUID | None = Query(default=None, alias="projectId"),
    task_status: TaskStatus | None = Query(default=None, alias="status"),
    assignee_id: uuid.UUID | None = Query(default=None, alias="assigneeId"),
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> TaskListResponse:
    """
    List tasks in the caller's projects.

    Optionally filter by projectId, status and assigneeId (all must match).
    """
    tasks = await ownership.list_owned_tasks(
        session,
        current_user.id,
        project_id=project_id,
        status=task_status.value if task_status else None,
        assignee_id=assignee_id,
    )
    return TaskListResponse(tasks=[TaskRead.model_validate(task) for task in tasks])


@router.get("/{task_id}", response_model=TaskDetailResponse)
async def get_task(
    task_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> TaskDetailResponse:
    """Get a task with its activity history."""
    task = await ownership.find_owned_task(session, task_id, current_user.id, with_activity=True)
    return TaskDetailResponse(task=TaskDetail.model_validate(task))


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: uuid.UUID,
    task_in: TaskUpdate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> TaskResponse:
    """
    Update a task.

    Logged as "updated" even when the update sets the status to completed.
    """
    user_id = current_user.id
    await ownership.update_task(session, task_id, user_id, task_in.model_dump(exclude_unset=True))
    await record_activity(session, user_id, task_id, ActivityAction.UPDATED)
    return await _task_response(session, task_id, user_id, "Task updated successfully")


@router.patch("/{task_id}/assign", response_model=TaskResponse)
async def assign_task(
    task_id: uuid.UUID,
    assign_in: TaskAssign,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> TaskResponse:
    """Assign the task to any existing user, or unassign it with a null assigneeId."""
    user_id = current_user.id
    await ownership.assign_task(session, task_id, user_id, assign_in.assignee_id)
    await record_activity(session, user_id, task_id, assignment_action(assign_in.assignee_id))
    return await _task_response(session, task_id, user_id, "Task assignment updated successfully")


@router.patch("/{task_id}/complete", response_model=TaskResponse)
async def complete_task(
    task_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> TaskResponse:
    """Mark a task as completed."""
    user_id = current_user.id
    await ownership.complete_task(session, task_id, user_id)
    await record_activity(session, user_id, task_id, ActivityAction.COMPLETED)
    return await _task_response(session, task_id, user_id, "Task marked as completed")


@router.delete("/{task_id}", response_model=MessageResponse)
async def delete_task(
    task_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> MessageResponse:
    """Delete a task and its activity log."""
    await ownership.delete_task(session, task_id, current_user.id)
    return MessageResponse(message="Task deleted successfully")
