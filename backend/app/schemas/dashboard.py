import uuid

from app.schemas.common import CamelModel, ProjectRef, TaskRef, UserRef, UTCDatetime


class DashboardSummary(CamelModel):
    total_projects: int
    total_tasks: int
    pending_tasks: int
    in_progress_tasks: int
    completed_tasks: int
    assigned_to_me: int
    overdue_tasks: int


class PriorityStats(CamelModel):
    high: int = 0
    medium: int = 0
    low: int = 0


class RecentActivity(CamelModel):
    id: int
    user_id: uuid.UUID
    task_id: uuid.UUID
    action: str
    created_at: UTCDatetime
    user: UserRef
    task: TaskRef


class DashboardResponse(CamelModel):
    summary: DashboardSummary
    priority_stats: PriorityStats
    recent_activity: list[RecentActivity]
    projects: list[ProjectRef]
