import uuid
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Optional
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field, Relationship

from app.time_utils import utcnow

if TYPE_CHECKING:
    from app.models.task import Task
    from app.models.user import User


class ActivityAction(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    ASSIGNED = "assigned"
    UNASSIGNED = "unassigned"
    COMPLETED = "completed"


class ActivityLog(SQLModel, table=True):
    """
    Append-only record of a single task-affecting action.

    Rows are never updated. They disappear only when their task is deleted.
    The integer id increases with insertion and breaks ties between entries
    sharing a timestamp.
    """

    __tablename__ = "activity_logs"

    id: Optional[int] = Field(default=None, primary_key=True)
    action: str = Field(index=True)

    user_id: uuid.UUID = Field(foreign_key="users.id", index=True)
    task_id: uuid.UUID = Field(foreign_key="tasks.id", ondelete="CASCADE", index=True)

    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True), index=True)

    # Relationships
    user: "User" = Relationship(back_populates="activity_logs")
    task: "Task" = Relationship(back_populates="activity_logs")
