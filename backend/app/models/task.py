import uuid
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Optional
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field, Relationship

from app.time_utils import utcnow

if TYPE_CHECKING:
    from app.models.project import Project
    from app.models.user import User
    from app.models.activity_log import ActivityLog


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Task(SQLModel, table=True):
    """
    Task model. Belongs to exactly one project for its whole lifetime.

    Ownership is never stored on the task itself: a task is visible to the
    owner of its project.
    """

    __tablename__ = "tasks"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    title: str = Field(index=True)
    description: str | None = Field(default=None)
    status: str = Field(default=TaskStatus.PENDING.value, index=True)
    priority: str = Field(default=TaskPriority.MEDIUM.value, index=True)
    due_date: datetime | None = Field(default=None, sa_type=DateTime(timezone=True))

    # Foreign keys
    project_id: uuid.UUID = Field(foreign_key="projects.id", ondelete="CASCADE", index=True)
    assignee_id: uuid.UUID | None = Field(default=None, foreign_key="users.id", index=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))

    # Relationships
    project: "Project" = Relationship(back_populates="tasks")
    assignee: Optional["User"] = Relationship(back_populates="assigned_tasks")
    activity_logs: list["ActivityLog"] = Relationship(back_populates="task")
