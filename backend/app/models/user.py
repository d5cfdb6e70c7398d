import uuid
from datetime import datetime
from typing import TYPE_CHECKING
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field, Relationship

from app.time_utils import utcnow

if TYPE_CHECKING:
    from app.models.project import Project
    from app.models.task import Task
    from app.models.activity_log import ActivityLog


class User(SQLModel, table=True):
    """Registered account. Owns projects and may be assigned tasks."""

    __tablename__ = "users"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    email: str = Field(index=True, unique=True)
    name: str
    password_hash: str
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))

    # Relationships
    projects: list["Project"] = Relationship(back_populates="owner")
    assigned_tasks: list["Task"] = Relationship(back_populates="assignee")
    activity_logs: list["ActivityLog"] = Relationship(back_populates="user")
