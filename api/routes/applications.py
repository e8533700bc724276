"""
Application workflow management endpoints.

Provides REST API for submitting applications, moving them through pipeline
stages and keeping notes on them.
"""

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import require_authenticated_user
from api.schemas.applications import (
    ApplicationCreate,
    ApplicationDetail,
    ApplicationResponse,
    ApplicationStatusUpdate,
    NoteCreate,
    NoteResponse,
)
from api.services import applications as application_service
from database.engine import get_db
from database.models.users import User

router = APIRouter(prefix="/applications", tags=["applications"])


@router.get(
    "",
    response_model=list[ApplicationDetail],
    summary="List Applications",
    description="All applications with candidate and job details, most recently applied first.",
)
async def list_applications(
    current_user: User = Depends(require_authenticated_user),
    db: AsyncSession = Depends(get_db),
):
    return await application_service.list_application_details(db)


@router.get(
    "/{application_id}",
    response_model=ApplicationResponse,
    summary="Get Application Details",
)
async def get_application(
    application_id: int = Path(..., description="Application ID"),
    current_user: User = Depends(require_authenticated_user),
    db: AsyncSession = Depends(get_db),
):
    return await application_service.get_application(db, application_id)


@router.post(
    "",
    response_model=ApplicationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit Application",
    description="Submit a candidate to a job. The caller is assigned to the application.",
)
async def create_application(
    request: ApplicationCreate,
    current_user: User = Depends(require_authenticated_user),
    db: AsyncSession = Depends(get_db),
):
    return await application_service.create_application(
        db,
        candidate_id=request.candidate_id,
        job_id=request.job_id,
        assigned_to=current_user.id,
        status=request.status,
        score=request.score,
        source=request.source,
    )


@router.put(
    "/{application_id}/status",
    response_model=ApplicationResponse,
    summary="Move Application Stage",
    description=(
        "Move an application to another pipeline column and record a "
        "`moved_candidate` activity. Send `expected_version` to reject the "
        "move with 409 if someone else moved the application first."
    ),
)
async def update_application_status(
    request: ApplicationStatusUpdate,
    application_id: int = Path(..., description="Application ID"),
    current_user: User = Depends(require_authenticated_user),
    db: AsyncSession = Depends(get_db),
):
    return await application_service.transition_status(
        db,
        application_id=application_id,
        new_status=request.status,
        user_id=current_user.id,
        expected_version=request.expected_version,
    )


@router.get(
    "/{application_id}/notes",
    response_model=list[NoteResponse],
    summary="List Notes",
)
async def list_notes(
    application_id: int = Path(..., description="Application ID"),
    current_user: User = Depends(require_authenticated_user),
    db: AsyncSession = Depends(get_db),
):
    return await application_service.list_notes(db, application_id)


@router.post(
    "/{application_id}/notes",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add Note",
)
async def add_note(
    request: NoteCreate,
    application_id: int = Path(..., description="Application ID"),
    current_user: User = Depends(require_authenticated_user),
    db: AsyncSession = Depends(get_db),
):
    return await application_service.add_note(
        db,
        application_id=application_id,
        author_id=current_user.id,
        content=request.content,
        is_private=request.is_private,
    )
