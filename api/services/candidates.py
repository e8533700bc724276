"""Candidate service functions."""

from typing import Any, Dict, List, Optional
import logging

from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import ConflictError, NotFoundError
from database.models.candidates import Candidate

logger = logging.getLogger(__name__)


async def get_candidate(session: AsyncSession, candidate_id: int) -> Candidate:
    """Get a candidate profile."""
    candidate = await session.get(Candidate, candidate_id)
    if candidate is None:
        raise NotFoundError("Candidate", candidate_id)
    return candidate


async def list_candidates(
    session: AsyncSession,
    search_query: Optional[str] = None,
) -> List[Candidate]:
    """
    List candidates, newest first.

    Args:
        session: Database session
        search_query: Optional case-insensitive substring matched against
            first name, last name and email

    Returns:
        Matching candidates
    """
    query = select(Candidate)
    if search_query:
        pattern = f"%{search_query}%"
        query = query.where(
            or_(
                Candidate.first_name.ilike(pattern),
                Candidate.last_name.ilike(pattern),
                Candidate.email.ilike(pattern),
            )
        )

    result = await session.execute(
        query.order_by(Candidate.created_at.desc(), Candidate.id.desc())
    )
    return list(result.scalars().all())


async def _ensure_email_free(
    session: AsyncSession,
    email: str,
    exclude_id: Optional[int] = None,
) -> None:
    query = select(Candidate.id).where(Candidate.email == email)
    if exclude_id is not None:
        query = query.where(Candidate.id != exclude_id)
    existing = await session.execute(query)
    if existing.scalar_one_or_none() is not None:
        raise ConflictError(f"A candidate with email {email} already exists")


async def create_candidate(session: AsyncSession, data: Dict[str, Any]) -> Candidate:
    """
    Create a candidate profile.

    Raises:
        ConflictError: If another candidate already uses the email
    """
    await _ensure_email_free(session, data["email"])

    candidate = Candidate(**data)
    session.add(candidate)
    await session.commit()
    await session.refresh(candidate)

    logger.info(f"Created candidate {candidate.id}")
    return candidate


async def update_candidate(
    session: AsyncSession,
    candidate_id: int,
    updates: Dict[str, Any],
) -> Candidate:
    """Apply a partial update to a candidate."""
    candidate = await get_candidate(session, candidate_id)

    if "email" in updates and updates["email"] != candidate.email:
        await _ensure_email_free(session, updates["email"], exclude_id=candidate_id)

    for key, value in updates.items():
        setattr(candidate, key, value)

    await session.commit()
    await session.refresh(candidate)

    logger.info(f"Updated candidate {candidate_id}: {sorted(updates)}")
    return candidate
