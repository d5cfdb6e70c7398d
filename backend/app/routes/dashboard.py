"""
Dashboard route: aggregate statistics for the caller.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import get_current_user
from app.database import get_session
from app.models import User
from app.schemas import DashboardResponse
from app.services.dashboard import build_dashboard

router = APIRouter()


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> DashboardResponse:
    """Summary counts, priority breakdown, recent activity and owned projects."""
    return await build_dashboard(session, current_user.id)
