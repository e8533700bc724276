"""
Candidate management endpoints.

Provides REST API for searching, viewing, creating and editing candidate
profiles.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import require_authenticated_user
from api.schemas.candidates import CandidateCreate, CandidateResponse, CandidateUpdate
from api.services import candidates as candidate_service
from database.engine import get_db
from database.models.users import User

router = APIRouter(prefix="/candidates", tags=["candidates"])


@router.get(
    "",
    response_model=list[CandidateResponse],
    summary="List Candidates",
    description="List candidates, newest first. `search` matches first name, last name or email.",
)
async def list_candidates(
    search: Optional[str] = Query(None, description="Case-insensitive name or email substring"),
    current_user: User = Depends(require_authenticated_user),
    db: AsyncSession = Depends(get_db),
):
    return await candidate_service.list_candidates(db, search_query=search)


@router.get(
    "/{candidate_id}",
    response_model=CandidateResponse,
    summary="Get Candidate",
)
async def get_candidate(
    candidate_id: int = Path(..., description="Candidate ID"),
    current_user: User = Depends(require_authenticated_user),
    db: AsyncSession = Depends(get_db),
):
    return await candidate_service.get_candidate(db, candidate_id)


@router.post(
    "",
    response_model=CandidateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Candidate",
    description="Create a candidate profile. Returns 409 if the email is already in use.",
)
async def create_candidate(
    request: CandidateCreate,
    current_user: User = Depends(require_authenticated_user),
    db: AsyncSession = Depends(get_db),
):
    return await candidate_service.create_candidate(db, request.model_dump())


@router.put(
    "/{candidate_id}",
    response_model=CandidateResponse,
    summary="Update Candidate",
)
async def update_candidate(
    request: CandidateUpdate,
    candidate_id: int = Path(..., description="Candidate ID"),
    current_user: User = Depends(require_authenticated_user),
    db: AsyncSession = Depends(get_db),
):
    """Partially update a candidate. Omitted fields are left unchanged."""
    return await candidate_service.update_candidate(
        db, candidate_id, request.model_dump(exclude_unset=True)
    )
