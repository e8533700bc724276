"""
Authentication endpoints for email/password signup and login.

Tokens are stateless bearer JWTs; there is no server-side session or
logout endpoint.
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import require_authenticated_user
from api.schemas.auth import LoginRequest, SignupRequest, TokenResponse, UserResponse
from api.services import users as user_service
from core.config import settings
from core.security import create_access_token
from database.engine import get_db
from database.models.users import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post(
    "/signup",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Sign Up",
    description="Create a hiring team account with email and password.",
)
async def signup(
    request: SignupRequest,
    db: AsyncSession = Depends(get_db),
):
    """Register a new user. Returns 409 if the email is taken."""
    user = await user_service.create_user(
        db,
        email=request.email,
        password=request.password,
        first_name=request.first_name,
        last_name=request.last_name,
    )
    logger.info(f"New user signed up: {user.id}")
    return user


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Log In",
    description="Exchange email and password for a bearer access token.",
)
async def login(
    request: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    user = await user_service.authenticate_user(db, request.email, request.password)
    token = create_access_token(user_id=user.id, email=user.email, role=user.role)

    logger.info(f"User logged in: {user.id}")
    return TokenResponse(
        access_token=token,
        expires_in=settings.access_token_expire_minutes * 60,
    )


@router.get(
    "/user",
    response_model=UserResponse,
    summary="Current User",
    description="Get the authenticated user's profile.",
)
async def get_current_user_info(
    current_user: User = Depends(require_authenticated_user),
):
    return current_user
