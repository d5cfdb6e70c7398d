from app.models.user import User
from app.models.project import Project
from app.models.task import Task, TaskStatus, TaskPriority
from app.models.activity_log import ActivityLog, ActivityAction

__all__ = [
    "User",
    "Project",
    "Task",
    "TaskStatus",
    "TaskPriority",
    "ActivityLog",
    "ActivityAction",
]
