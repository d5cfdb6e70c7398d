import uuid
from datetime import datetime
from typing import TYPE_CHECKING
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field, Relationship

from app.time_utils import utcnow

if TYPE_CHECKING:
    from app.models.task import Task
    from app.models.user import User


class Project(SQLModel, table=True):
    """Project model - groups tasks together under a single owner."""

    __tablename__ = "projects"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str = Field(index=True)
    description: str | None = Field(default=None)

    # Set once at creation, never reassigned
    owner_id: uuid.UUID = Field(foreign_key="users.id", index=True)

    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))

    # Relationships
    owner: "User" = Relationship(back_populates="projects")
    tasks: list["Task"] = Relationship(back_populates="project")
