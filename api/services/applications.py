"""
Application service functions for API endpoints.

Holds the status transition handler that backs the pipeline board's
drag-and-drop, plus application and note CRUD.
"""

from typing import Any, Dict, List, Optional
from datetime import datetime, timezone
import logging

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from api.services import activities as activity_log
from core.exceptions import ConflictError, InternalError, NotFoundError, ValidationError
from core.pipeline import INITIAL_STATUS, PipelineApplication, sort_most_recent_first
from database.models.activities import ActivityAction, EntityRef
from database.models.applications import Application, Note
from database.models.candidates import Candidate
from database.models.jobs import Job

logger = logging.getLogger(__name__)


async def get_application(session: AsyncSession, application_id: int) -> Application:
    """
    Get one application.

    Raises:
        NotFoundError: If the application does not exist
    """
    application = await session.get(Application, application_id)
    if application is None:
        raise NotFoundError("Application", application_id)
    return application


async def create_application(
    session: AsyncSession,
    candidate_id: int,
    job_id: int,
    assigned_to: Optional[int],
    status: str = INITIAL_STATUS.value,
    score: Optional[int] = None,
    source: Optional[str] = None,
) -> Application:
    """
    Submit a candidate to a job.

    Duplicate (candidate, job) pairs are accepted.

    Raises:
        NotFoundError: If the candidate or job does not exist
    """
    if await session.get(Candidate, candidate_id) is None:
        raise NotFoundError("Candidate", candidate_id)
    if await session.get(Job, job_id) is None:
        raise NotFoundError("Job", job_id)

    application = Application(
        candidate_id=candidate_id,
        job_id=job_id,
        status=status,
        score=score,
        source=source,
        assigned_to=assigned_to,
    )
    session.add(application)
    await session.commit()
    await session.refresh(application)

    logger.info(
        f"Created application {application.id} for candidate {candidate_id} on job {job_id}"
    )
    return application


async def transition_status(
    session: AsyncSession,
    application_id: int,
    new_status: str,
    user_id: int,
    expected_version: Optional[int] = None,
) -> Application:
    """
    Move an application to a new pipeline status.

    The status is written as given; it is not checked against the known
    stages and no transition order is enforced. Without ``expected_version``
    the last write wins. With it, the write only happens if the stored
    version still matches.

    The status update and the activity entry are committed separately. If
    the activity insert fails the new status stays in place.

    Args:
        session: Database session
        application_id: Application to move
        new_status: Target status, any non-empty string
        user_id: Acting user, recorded on the activity
        expected_version: Optional version the caller last saw

    Returns:
        The updated application

    Raises:
        ValidationError: If new_status is empty
        NotFoundError: If the application does not exist
        ConflictError: If expected_version no longer matches
        InternalError: If storage fails
    """
    if not new_status:
        raise ValidationError.for_field("status", "Status is required")

    application = await get_application(session, application_id)
    previous_status = application.status

    stmt = (
        update(Application)
        .where(Application.id == application_id)
        .values(
            status=new_status,
            updated_at=datetime.now(timezone.utc),
            version=Application.version + 1,
        )
        .execution_options(synchronize_session=False)
    )
    if expected_version is not None:
        stmt = stmt.where(Application.version == expected_version)

    try:
        result = await session.execute(stmt)
        if result.rowcount == 0:
            await session.rollback()
            if expected_version is not None:
                raise ConflictError(
                    f"Application {application_id} is no longer at version {expected_version}"
                )
            raise NotFoundError("Application", application_id)
        await session.commit()
        await session.refresh(application)
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.error(f"Failed to update status of application {application_id}", exc_info=True)
        raise InternalError("Failed to update application status") from exc

    logger.info(
        f"Application {application_id} moved from {previous_status!r} to {new_status!r} "
        f"by user {user_id}"
    )

    try:
        await activity_log.record(
            session,
            user_id=user_id,
            action=ActivityAction.MOVED_CANDIDATE.value,
            entity=EntityRef.application(application.id),
            metadata={"status": new_status, "candidate_id": application.candidate_id},
        )
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.error(
            f"Application {application_id} status changed but its activity was not recorded",
            exc_info=True,
        )
        raise InternalError("Status updated but the activity could not be recorded") from exc

    return application


def _pipeline_query():
    return (
        select(
            Application,
            Candidate.first_name,
            Candidate.last_name,
            Candidate.email,
            Job.title,
        )
        .join(Candidate, Application.candidate_id == Candidate.id)
        .join(Job, Application.job_id == Job.id)
    )


async def load_pipeline_applications(session: AsyncSession) -> List[PipelineApplication]:
    """
    Read every application with its candidate name and job title.

    Names are joined at read time and never stored on the application.
    """
    result = await session.execute(_pipeline_query())
    rows = [
        PipelineApplication(
            id=application.id,
            status=application.status,
            candidate_id=application.candidate_id,
            job_id=application.job_id,
            applied_at=application.applied_at,
            candidate_name=f"{first_name} {last_name}",
            job_title=title,
            score=application.score,
        )
        for application, first_name, last_name, _email, title in result.all()
    ]
    return sort_most_recent_first(rows)


async def list_application_details(
    session: AsyncSession,
    limit: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """
    Applications with candidate and job fields, most recently applied first.

    Args:
        session: Database session
        limit: Optional cap on the number of rows

    Returns:
        List of application dictionaries
    """
    query = _pipeline_query().order_by(
        Application.applied_at.desc(), Application.id.asc()
    )
    if limit is not None:
        query = query.limit(limit)
    result = await session.execute(query)

    details = []
    for application, first_name, last_name, email, title in result.all():
        details.append({
            "id": application.id,
            "status": application.status,
            "stage": application.stage.value,
            "score": application.score,
            "applied_at": application.applied_at,
            "candidate_id": application.candidate_id,
            "candidate_name": f"{first_name} {last_name}",
            "candidate_email": email,
            "job_id": application.job_id,
            "job_title": title,
        })
    return details


# ==================== Notes ==================== #

async def list_notes(session: AsyncSession, application_id: int) -> List[Note]:
    """Notes on an application, newest first."""
    await get_application(session, application_id)
    result = await session.execute(
        select(Note)
        .where(Note.application_id == application_id)
        .order_by(Note.created_at.desc(), Note.id.desc())
    )
    return list(result.scalars().all())


async def add_note(
    session: AsyncSession,
    application_id: int,
    author_id: int,
    content: str,
    is_private: bool = False,
) -> Note:
    """Attach a note to an application."""
    await get_application(session, application_id)
    note = Note(
        application_id=application_id,
        author_id=author_id,
        content=content,
        is_private=is_private,
    )
    session.add(note)
    await session.commit()
    await session.refresh(note)
    return note
