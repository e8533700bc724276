"""
Dashboard endpoints: headline metrics, recent applications, the pipeline
(kanban) view and the activity feed.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import require_authenticated_user
from api.schemas.applications import ApplicationDetail
from api.schemas.dashboard import ActivityResponse, DashboardMetrics, PipelineResponse
from api.services import activities as activity_service
from api.services import dashboard as dashboard_service
from core.config import settings
from database.engine import get_db
from database.models.users import User

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get(
    "/metrics",
    response_model=DashboardMetrics,
    summary="Dashboard Metrics",
    description="Total applications, active jobs, scheduled interviews and mean time to hire.",
)
async def get_metrics(
    current_user: User = Depends(require_authenticated_user),
    db: AsyncSession = Depends(get_db),
):
    return await dashboard_service.get_metrics(db)


@router.get(
    "/recent-applications",
    response_model=list[ApplicationDetail],
    summary="Recent Applications",
)
async def get_recent_applications(
    current_user: User = Depends(require_authenticated_user),
    db: AsyncSession = Depends(get_db),
):
    """Latest applications with candidate and job details."""
    return await dashboard_service.get_recent_applications(
        db, limit=settings.recent_application_limit
    )


@router.get(
    "/pipeline",
    response_model=PipelineResponse,
    summary="Pipeline View",
    description="Every application grouped by status, with per-status counts.",
)
async def get_pipeline(
    current_user: User = Depends(require_authenticated_user),
    db: AsyncSession = Depends(get_db),
):
    """Build the kanban board. Statuses outside the known stages get their own column."""
    return await dashboard_service.get_pipeline(db)


@router.get(
    "/activities",
    response_model=list[ActivityResponse],
    summary="Recent Activity",
)
async def get_recent_activities(
    current_user: User = Depends(require_authenticated_user),
    db: AsyncSession = Depends(get_db),
):
    return await activity_service.list_recent(db, limit=settings.recent_activity_limit)
