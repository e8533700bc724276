"""
Activity log service.

The log is append-only: this module exposes ``record`` and read functions
and nothing that updates or deletes rows.
"""

from typing import Any, Dict, List, Optional
import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from database.models.activities import Activity, EntityRef
from database.models.users import User

logger = logging.getLogger(__name__)


async def record(
    session: AsyncSession,
    user_id: int,
    action: str,
    entity: EntityRef,
    metadata: Optional[Dict[str, Any]] = None,
) -> Activity:
    """
    Append one activity entry and commit it.

    The entity reference is stored as given; the referenced row is not
    looked up.

    Args:
        session: Database session
        user_id: Acting user
        action: Free-form action tag, e.g. "moved_candidate"
        entity: Weak reference to the affected record
        metadata: Extra context stored with the entry

    Returns:
        The stored activity
    """
    activity = Activity(
        user_id=user_id,
        action=action,
        entity_type=entity.entity_type.value,
        entity_id=entity.entity_id,
        details=metadata,
    )
    session.add(activity)
    await session.commit()
    await session.refresh(activity)

    logger.debug(
        f"Recorded activity {activity.id}: {action} on "
        f"{entity.entity_type.value}:{entity.entity_id} by user {user_id}"
    )
    return activity


async def list_recent(session: AsyncSession, limit: int = 10) -> List[Dict[str, Any]]:
    """
    Most recent activities first, with the acting user's display fields.

    Args:
        session: Database session
        limit: Maximum number of entries

    Returns:
        List of activity dictionaries
    """
    result = await session.execute(
        select(Activity, User)
        .join(User, Activity.user_id == User.id)
        .order_by(Activity.created_at.desc(), Activity.id.desc())
        .limit(limit)
    )

    return [
        {
            "id": activity.id,
            "user_id": activity.user_id,
            "user_name": user.display_name,
            "user_profile_image": user.profile_image_url,
            "action": activity.action,
            "entity_type": activity.entity_type,
            "entity_id": activity.entity_id,
            "metadata": activity.details,
            "created_at": activity.created_at,
        }
        for activity, user in result.all()
    ]


async def list_for_entity(session: AsyncSession, entity: EntityRef) -> List[Activity]:
    """All activities pointing at one record, most recent first."""
    result = await session.execute(
        select(Activity)
        .where(
            Activity.entity_type == entity.entity_type.value,
            Activity.entity_id == entity.entity_id,
        )
        .order_by(Activity.created_at.desc(), Activity.id.desc())
    )
    return list(result.scalars().all())


async def count(session: AsyncSession) -> int:
    """Total number of stored activities."""
    result = await session.execute(select(func.count()).select_from(Activity))
    return result.scalar() or 0
