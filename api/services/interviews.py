"""
Interview service functions for API endpoints.

Interviews have their own status; scheduling one does not move the
application through the pipeline.
"""

from typing import Any, Dict, List, Optional
from datetime import datetime, timedelta, timezone
import logging

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from api.services import activities as activity_log
from api.services.applications import get_application
from core.exceptions import NotFoundError
from database.models.activities import ActivityAction, EntityRef
from database.models.applications import Application
from database.models.candidates import Candidate
from database.models.interviews import Interview, InterviewStatus
from database.models.jobs import Job
from database.models.users import User

logger = logging.getLogger(__name__)


async def get_interview(session: AsyncSession, interview_id: int) -> Interview:
    interview = await session.get(Interview, interview_id)
    if interview is None:
        raise NotFoundError("Interview", interview_id)
    return interview


async def list_interviews(session: AsyncSession) -> List[Interview]:
    """All interviews, latest scheduled first."""
    result = await session.execute(
        select(Interview).order_by(Interview.scheduled_at.desc(), Interview.id.desc())
    )
    return list(result.scalars().all())


async def count_scheduled(session: AsyncSession) -> int:
    result = await session.execute(
        select(func.count())
        .select_from(Interview)
        .where(Interview.status == InterviewStatus.SCHEDULED.value)
    )
    return result.scalar() or 0


def _summary_query():
    return (
        select(Interview, Candidate, Job.title, User)
        .join(Application, Interview.application_id == Application.id)
        .join(Candidate, Application.candidate_id == Candidate.id)
        .join(Job, Application.job_id == Job.id)
        .join(User, Interview.interviewer_id == User.id)
    )


def _summaries(rows) -> List[Dict[str, Any]]:
    return [
        {
            "id": interview.id,
            "application_id": interview.application_id,
            "scheduled_at": interview.scheduled_at,
            "duration": interview.duration,
            "type": interview.type,
            "status": interview.status,
            "candidate_name": candidate.full_name,
            "job_title": title,
            "interviewer_name": interviewer.display_name,
        }
        for interview, candidate, title, interviewer in rows
    ]


async def list_today(
    session: AsyncSession,
    now: Optional[datetime] = None,
) -> List[Dict[str, Any]]:
    """
    Interviews scheduled on the current UTC day, earliest first.

    Args:
        session: Database session
        now: Reference time, defaults to the current time

    Returns:
        Interview summaries with candidate, job and interviewer names
    """
    now = now or datetime.now(timezone.utc)
    start = now.replace(hour=0, minute=0, second=0, microsecond=0)
    end = start + timedelta(days=1)

    result = await session.execute(
        _summary_query()
        .where(Interview.scheduled_at >= start, Interview.scheduled_at < end)
        .order_by(Interview.scheduled_at.asc(), Interview.id.asc())
    )
    return _summaries(result.all())


async def list_upcoming(
    session: AsyncSession,
    limit: int = 10,
    now: Optional[datetime] = None,
) -> List[Dict[str, Any]]:
    """The next ``limit`` interviews from now, earliest first."""
    now = now or datetime.now(timezone.utc)

    result = await session.execute(
        _summary_query()
        .where(Interview.scheduled_at >= now)
        .order_by(Interview.scheduled_at.asc(), Interview.id.asc())
        .limit(limit)
    )
    return _summaries(result.all())


async def schedule_interview(
    session: AsyncSession,
    interviewer_id: int,
    data: Dict[str, Any],
) -> Interview:
    """
    Schedule an interview and log a ``scheduled_interview`` activity.

    Args:
        session: Database session
        interviewer_id: The scheduling user, recorded as interviewer
        data: Validated interview fields including application_id

    Returns:
        The created interview

    Raises:
        NotFoundError: If the application does not exist
    """
    await get_application(session, data["application_id"])

    interview = Interview(interviewer_id=interviewer_id, **data)
    session.add(interview)
    await session.commit()
    await session.refresh(interview)

    logger.info(
        f"Interview {interview.id} scheduled for application {interview.application_id} "
        f"at {interview.scheduled_at.isoformat()}"
    )

    await activity_log.record(
        session,
        user_id=interviewer_id,
        action=ActivityAction.SCHEDULED_INTERVIEW.value,
        entity=EntityRef.interview(interview.id),
        metadata={"application_id": interview.application_id},
    )
    return interview


async def update_interview(
    session: AsyncSession,
    interview_id: int,
    updates: Dict[str, Any],
) -> Interview:
    """Apply a partial update to an interview."""
    interview = await get_interview(session, interview_id)

    for key, value in updates.items():
        setattr(interview, key, value)

    await session.commit()
    await session.refresh(interview)

    logger.info(f"Updated interview {interview_id}: {sorted(updates)}")
    return interview
