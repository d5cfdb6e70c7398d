import uuid

from app.models import TaskPriority, TaskStatus
from app.schemas.common import CamelModel, NonEmptyStr, ProjectRef, TrimmedStr, UserContact, UserRef, UTCDatetime


class TaskCreate(CamelModel):
    """Schema for creating a new task."""
    title: NonEmptyStr
    description: TrimmedStr | None = None
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: UTCDatetime | None = None
    project_id: uuid.UUID


class TaskUpdate(CamelModel):
    """
    Schema for updating a task.

    Only fields present in the request body are applied. An explicit null
    due date clears it.
    """
    title: NonEmptyStr | None = None
    description: TrimmedStr | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: UTCDatetime | None = None


class TaskAssign(CamelModel):
    """Schema for (un)assigning a task. A null or missing assignee unassigns."""
    assignee_id: uuid.UUID | None = None


class ActivityRead(CamelModel):
    """Activity entry as shown on a task."""
    id: int
    user_id: uuid.UUID
    task_id: uuid.UUID
    action: str
    created_at: UTCDatetime
    user: UserRef


class TaskRead(CamelModel):
    """Schema for reading a task."""
    id: uuid.UUID
    title: str
    description: str | None
    status: str
    priority: str
    due_date: UTCDatetime | None
    project_id: uuid.UUID
    assignee_id: uuid.UUID | None
    created_at: UTCDatetime
    updated_at: UTCDatetime
    project: ProjectRef
    assignee: UserContact | None


class TaskDetail(TaskRead):
    """Task with its full activity history, newest first."""
    activity_logs: list[ActivityRead] = []


class TaskResponse(CamelModel):
    message: str | None = None
    task: TaskRead


class TaskDetailResponse(CamelModel):
    task: TaskDetail


class TaskListResponse(CamelModel):
    tasks: list[TaskRead]
