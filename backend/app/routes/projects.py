"""
Project routes. Every route is scoped to projects the caller owns.
"""

import uuid
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import get_current_user
from app.database import get_session
from app.models import User
from app.schemas import (
    MessageResponse,
    ProjectCreate,
    ProjectDetail,
    ProjectDetailResponse,
    ProjectListItem,
    ProjectListResponse,
    ProjectRead,
    ProjectResponse,
    ProjectUpdate,
)
from app.services import ownership

router = APIRouter()


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    project_in: ProjectCreate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> ProjectResponse:
    """Create a new project owned by the caller."""
    project = await ownership.create_project(session, current_user.id, project_in.model_dump())
    return ProjectResponse(
        message="Project created successfully",
        project=ProjectRead.model_validate(project),
    )


@router.get("", response_model=ProjectListResponse)
async def list_projects(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> ProjectListResponse:
    """List the caller's projects."""
    projects = await ownership.list_owned_projects(session, current_user.id)
    return ProjectListResponse(projects=[ProjectListItem.model_validate(p) for p in projects])


@router.get("/{project_id}", response_model=ProjectDetailResponse)
async def get_project(
    project_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> ProjectDetailResponse:
    """Get one of the caller's projects with its tasks."""
    project = await ownership.find_owned_project(session, project_id, current_user.id, with_tasks=True)
    return ProjectDetailResponse(project=ProjectDetail.model_validate(project))


@router.put("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: uuid.UUID,
    project_in: ProjectUpdate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> ProjectResponse:
    """Replace a project's name and description."""
    project = await ownership.update_project(
        session, project_id, current_user.id, project_in.model_dump(exclude_unset=True)
    )
    return ProjectResponse(
        message="Project updated successfully",
        project=ProjectRead.model_validate(project),
    )


@router.delete("/{project_id}", response_model=MessageResponse)
async def delete_project(
    project_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> MessageResponse:
    """Delete a project and all its tasks."""
    await ownership.delete_project(session, project_id, current_user.id)
    return MessageResponse(message="Project deleted successfully")
