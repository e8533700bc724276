"""
Interview scheduling endpoints.
"""

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import require_authenticated_user
from api.schemas.interviews import (
    InterviewCreate,
    InterviewResponse,
    InterviewSummary,
    InterviewUpdate,
)
from api.services import interviews as interview_service
from core.config import settings
from database.engine import get_db
from database.models.users import User

router = APIRouter(prefix="/interviews", tags=["interviews"])


@router.get(
    "",
    response_model=list[InterviewResponse],
    summary="List Interviews",
)
async def list_interviews(
    current_user: User = Depends(require_authenticated_user),
    db: AsyncSession = Depends(get_db),
):
    return await interview_service.list_interviews(db)


@router.get(
    "/today",
    response_model=list[InterviewSummary],
    summary="Today's Interviews",
    description="Interviews scheduled for the current UTC day, earliest first.",
)
async def list_today(
    current_user: User = Depends(require_authenticated_user),
    db: AsyncSession = Depends(get_db),
):
    return await interview_service.list_today(db)


@router.get(
    "/upcoming",
    response_model=list[InterviewSummary],
    summary="Upcoming Interviews",
)
async def list_upcoming(
    current_user: User = Depends(require_authenticated_user),
    db: AsyncSession = Depends(get_db),
):
    return await interview_service.list_upcoming(
        db, limit=settings.upcoming_interview_limit
    )


@router.post(
    "",
    response_model=InterviewResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Schedule Interview",
    description=(
        "Schedule an interview with the caller as interviewer. The "
        "application's pipeline status is not changed."
    ),
)
async def schedule_interview(
    request: InterviewCreate,
    current_user: User = Depends(require_authenticated_user),
    db: AsyncSession = Depends(get_db),
):
    return await interview_service.schedule_interview(
        db,
        interviewer_id=current_user.id,
        data=request.model_dump(),
    )


@router.put(
    "/{interview_id}",
    response_model=InterviewResponse,
    summary="Update Interview",
)
async def update_interview(
    request: InterviewUpdate,
    interview_id: int = Path(..., description="Interview ID"),
    current_user: User = Depends(require_authenticated_user),
    db: AsyncSession = Depends(get_db),
):
    """Reschedule, cancel or record feedback. Omitted fields are left unchanged."""
    return await interview_service.update_interview(
        db, interview_id, request.model_dump(exclude_unset=True)
    )
