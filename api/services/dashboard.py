"""
Dashboard service functions.

Builds the headline metrics, the recent applications list and the pipeline
(kanban) view.
"""

from typing import Any, Dict, List, Optional
import logging

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from api.services import applications as application_service
from api.services import interviews as interview_service
from api.services import jobs as job_service
from core.pipeline import PipelineStatus, project
from database.models.applications import Application

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400


async def average_time_to_hire(session: AsyncSession) -> Optional[float]:
    """
    Mean days from application to hire.

    The last update of a hired application is taken as its hire date.
    Returns None when nobody has been hired.
    """
    result = await session.execute(
        select(Application.applied_at, Application.updated_at).where(
            Application.status == PipelineStatus.HIRED.value
        )
    )
    durations = [
        (updated_at - applied_at).total_seconds() / SECONDS_PER_DAY
        for applied_at, updated_at in result.all()
        if applied_at is not None and updated_at is not None
    ]
    if not durations:
        return None
    return round(sum(durations) / len(durations), 1)


async def get_metrics(session: AsyncSession) -> Dict[str, Any]:
    """
    Headline counts for the dashboard.

    Returns:
        Dictionary with total_applications, active_jobs,
        scheduled_interviews and time_to_hire_days
    """
    total_result = await session.execute(select(func.count()).select_from(Application))

    return {
        "total_applications": total_result.scalar() or 0,
        "active_jobs": await job_service.count_active_jobs(session),
        "scheduled_interviews": await interview_service.count_scheduled(session),
        "time_to_hire_days": await average_time_to_hire(session),
    }


async def get_recent_applications(
    session: AsyncSession,
    limit: int = 10,
) -> List[Dict[str, Any]]:
    return await application_service.list_application_details(session, limit=limit)


async def get_pipeline(session: AsyncSession) -> Dict[str, Any]:
    """
    Group every application into pipeline columns.

    Reads the whole applications table; there is no pagination.

    Returns:
        Dictionary with ``stats`` (ordered {status, count} list),
        ``applications`` (applied_at descending) and ``groups``
        (status -> applications)
    """
    rows = await application_service.load_pipeline_applications(session)
    projection = project(rows)

    logger.debug(f"Projected {projection.total} applications into {len(projection.groups)} columns")

    return {
        "stats": projection.stats(),
        "applications": [row.to_dict() for row in rows],
        "groups": {
            status: [row.to_dict() for row in group]
            for status, group in projection.groups.items()
        },
    }
