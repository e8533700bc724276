"""
Job posting management endpoints.

Provides REST API for listing, viewing, posting and editing jobs.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import require_authenticated_user
from api.schemas.jobs import JobCreate, JobResponse, JobUpdate
from api.services import jobs as job_service
from database.engine import get_db
from database.models.users import User

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.get(
    "",
    response_model=list[JobResponse],
    summary="List Jobs",
    description="List job postings, newest first.",
)
async def list_jobs(
    status_filter: Optional[str] = Query(None, alias="status", description="Filter by status (active, paused, closed)"),
    department: Optional[str] = Query(None, description="Filter by department"),
    current_user: User = Depends(require_authenticated_user),
    db: AsyncSession = Depends(get_db),
):
    return await job_service.list_jobs(db, status=status_filter, department=department)


@router.get(
    "/{job_id}",
    response_model=JobResponse,
    summary="Get Job Details",
)
async def get_job(
    job_id: int = Path(..., description="Job ID"),
    current_user: User = Depends(require_authenticated_user),
    db: AsyncSession = Depends(get_db),
):
    return await job_service.get_job(db, job_id)


@router.post(
    "",
    response_model=JobResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Post Job",
    description="Create a job posting. The caller is recorded as the poster.",
)
async def create_job(
    request: JobCreate,
    current_user: User = Depends(require_authenticated_user),
    db: AsyncSession = Depends(get_db),
):
    return await job_service.create_job(
        db,
        posted_by=current_user.id,
        data=request.model_dump(mode="json"),
    )


@router.put(
    "/{job_id}",
    response_model=JobResponse,
    summary="Update Job",
    description="Partially update a job posting. Omitted fields are left unchanged.",
)
async def update_job(
    request: JobUpdate,
    job_id: int = Path(..., description="Job ID"),
    current_user: User = Depends(require_authenticated_user),
    db: AsyncSession = Depends(get_db),
):
    return await job_service.update_job(
        db, job_id, request.model_dump(mode="json", exclude_unset=True)
    )
