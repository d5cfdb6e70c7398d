from app.schemas.common import MessageResponse
from app.schemas.user import UserRegister, UserLogin, UserRead, AuthResponse, UserResponse
from app.schemas.project import (
    ProjectCreate,
    ProjectUpdate,
    ProjectRead,
    ProjectListItem,
    ProjectDetail,
    ProjectResponse,
    ProjectDetailResponse,
    ProjectListResponse,
)
from app.schemas.task import (
    TaskCreate,
    TaskUpdate,
    TaskAssign,
    TaskRead,
    TaskDetail,
    TaskResponse,
    TaskDetailResponse,
    TaskListResponse,
)
from app.schemas.dashboard import DashboardResponse, DashboardSummary, PriorityStats, RecentActivity

__all__ = [
    "MessageResponse",
    "UserRegister",
    "UserLogin",
    "UserRead",
    "AuthResponse",
    "UserResponse",
    "ProjectCreate",
    "ProjectUpdate",
    "ProjectRead",
    "ProjectListItem",
    "ProjectDetail",
    "ProjectResponse",
    "ProjectDetailResponse",
    "ProjectListResponse",
    "TaskCreate",
    "TaskUpdate",
    "TaskAssign",
    "TaskRead",
    "TaskDetail",
    "TaskResponse",
    "TaskDetailResponse",
    "TaskListResponse",
    "DashboardResponse",
    "DashboardSummary",
    "PriorityStats",
    "RecentActivity",
]
