import uuid

from app.schemas.common import CamelModel, NonEmptyStr, TaskSummary, TrimmedStr, UserContact, UTCDatetime


class ProjectCreate(CamelModel):
    """Schema for creating a new project."""
    name: NonEmptyStr
    description: TrimmedStr | None = None


class ProjectUpdate(CamelModel):
    """Schema for replacing a project's editable fields (PUT)."""
    name: NonEmptyStr
    description: TrimmedStr | None = None


class ProjectRead(CamelModel):
    """Schema for reading a project."""
    id: uuid.UUID
    name: str
    description: str | None
    owner_id: uuid.UUID
    owner: UserContact
    created_at: UTCDatetime
    updated_at: UTCDatetime


class ProjectListItem(ProjectRead):
    """Project as it appears in the listing, with a task digest."""
    tasks: list[TaskSummary] = []


class ProjectTask(CamelModel):
    """Task nested inside a project detail view."""
    id: uuid.UUID
    title: str
    description: str | None
    status: str
    priority: str
    due_date: UTCDatetime | None
    assignee_id: uuid.UUID | None
    assignee: UserContact | None
    created_at: UTCDatetime
    updated_at: UTCDatetime


class ProjectDetail(ProjectRead):
    """Single project with its tasks and their assignees."""
    tasks: list[ProjectTask] = []


class ProjectResponse(CamelModel):
    message: str | None = None
    project: ProjectRead


class ProjectDetailResponse(CamelModel):
    project: ProjectDetail


class ProjectListResponse(CamelModel):
    projects: list[ProjectListItem]
