"""Job service functions."""

from typing import Any, Dict, List, Optional
import logging

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from api.services import activities as activity_log
from core.exceptions import NotFoundError
from database.models.activities import ActivityAction, EntityRef
from database.models.applications import Application
from database.models.jobs import Job, JobStatus

logger = logging.getLogger(__name__)


async def get_job(session: AsyncSession, job_id: int) -> Job:
    """Get job details."""
    job = await session.get(Job, job_id)
    if job is None:
        raise NotFoundError("Job", job_id)
    return job


async def list_jobs(
    session: AsyncSession,
    status: Optional[str] = None,
    department: Optional[str] = None,
) -> List[Job]:
    """List jobs, newest first."""
    query = select(Job)
    if status:
        query = query.where(Job.status == status)
    if department:
        query = query.where(Job.department == department)

    result = await session.execute(
        query.order_by(Job.created_at.desc(), Job.id.desc())
    )
    return list(result.scalars().all())


async def count_active_jobs(session: AsyncSession) -> int:
    result = await session.execute(
        select(func.count()).select_from(Job).where(Job.status == JobStatus.ACTIVE.value)
    )
    return result.scalar() or 0


async def count_applications(session: AsyncSession, job_id: int) -> int:
    result = await session.execute(
        select(func.count())
        .select_from(Application)
        .where(Application.job_id == job_id)
    )
    return result.scalar() or 0


async def create_job(
    session: AsyncSession,
    posted_by: int,
    data: Dict[str, Any],
) -> Job:
    """
    Post a new job and log a ``posted_job`` activity.

    Args:
        session: Database session
        posted_by: ID of the posting user
        data: Validated job fields

    Returns:
        The created job
    """
    job = Job(posted_by=posted_by, **data)
    session.add(job)
    await session.commit()
    await session.refresh(job)

    logger.info(f"Job {job.id} posted by user {posted_by}: {job.title}")

    await activity_log.record(
        session,
        user_id=posted_by,
        action=ActivityAction.POSTED_JOB.value,
        entity=EntityRef.job(job.id),
        metadata={"job_title": job.title},
    )
    return job


async def update_job(
    session: AsyncSession,
    job_id: int,
    updates: Dict[str, Any],
) -> Job:
    """Apply a partial update to a job."""
    job = await get_job(session, job_id)

    for key, value in updates.items():
        setattr(job, key, value)

    await session.commit()
    await session.refresh(job)

    logger.info(f"Updated job {job_id}: {sorted(updates)}")
    return job
