"""FastAPI dependencies for dependency injection."""

from typing import Optional
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import AuthError
from database.engine import get_db
from database.models.users import User


async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> Optional[User]:
    """
    Load the user the authentication middleware identified.
    Returns None if the request carries no identity.
    """
    user_id = request.scope.get("user_id")
    if user_id is None:
        return None
    return await db.get(User, user_id)


async def require_authenticated_user(
    current_user: Optional[User] = Depends(get_current_user),
) -> User:
    """Require an existing, active user behind the request."""
    if current_user is None:
        raise AuthError()
    if not current_user.is_active:
        raise AuthError("User account is inactive")
    return current_user
