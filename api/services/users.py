"""
User service functions for API endpoints.

Covers account signup and password login for the hiring team.
"""

from typing import Optional
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import AuthError, ConflictError, NotFoundError
from core.security import hash_password, verify_password
from database.models.users import User, UserRole

logger = logging.getLogger(__name__)


async def get_user(session: AsyncSession, user_id: int) -> User:
    """
    Get user details.

    Args:
        session: Database session
        user_id: The user ID

    Returns:
        The user

    Raises:
        NotFoundError: If the user does not exist
    """
    user = await session.get(User, user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    return user


async def get_user_by_email(session: AsyncSession, email: str) -> Optional[User]:
    result = await session.execute(
        select(User).where(User.email == email.lower())
    )
    return result.scalar_one_or_none()


async def create_user(
    session: AsyncSession,
    email: str,
    password: str,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    role: str = UserRole.RECRUITER.value,
) -> User:
    """
    Register a new user.

    Emails are stored lower-cased.

    Raises:
        ConflictError: If the email is already registered
    """
    email = email.lower()
    if await get_user_by_email(session, email) is not None:
        raise ConflictError("Email already registered")

    user = User(
        email=email,
        password_hash=hash_password(password),
        first_name=first_name,
        last_name=last_name,
        role=role,
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)

    logger.info(f"Created user {user.id}")
    return user


async def authenticate_user(session: AsyncSession, email: str, password: str) -> User:
    """
    Check credentials and return the matching active user.

    Raises:
        AuthError: If the email is unknown, the password is wrong or the
            account is inactive
    """
    user = await get_user_by_email(session, email)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Failed login attempt")
        raise AuthError("Invalid email or password")
    if not user.is_active:
        raise AuthError("User account is inactive")
    return user
