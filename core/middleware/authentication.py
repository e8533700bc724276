"""
Authentication middleware.

Validates the bearer JWT on every non-public request and places the
caller's user id on the ASGI scope. Loading the user row is left to the
``require_authenticated_user`` dependency so that requests which never
touch the database stay cheap.
"""

import logging
from typing import Callable, Iterable, Optional

import jwt
from fastapi import Request, status

from core.config import settings
from core.middleware.error_handling import error_response, get_request_id
from core.security import verify_jwt_token

logger = logging.getLogger(__name__)


def default_public_endpoints(api_prefix: str) -> list[str]:
    return [
        "/",
        "/health",
        "/ready",
        "/docs",
        "/redoc",
        "/openapi.json",
        f"{api_prefix}/auth/login",
        f"{api_prefix}/auth/signup",
    ]


class AuthenticationError(Exception):
    """Base exception for authentication errors."""
    pass


class TokenExpiredError(AuthenticationError):
    """Raised when JWT token has expired."""
    pass


class TokenInvalidError(AuthenticationError):
    """Raised when JWT token is missing or invalid."""
    pass


class AuthenticationMiddleware:
    """
    Reject requests without a valid bearer token.

    On success the scope carries ``user_id`` and ``jwt_payload``.
    """

    def __init__(
        self,
        app: Callable,
        jwt_secret: str,
        jwt_algorithm: str = "HS256",
        public_endpoints: Optional[Iterable[str]] = None,
    ):
        """
        Initialize authentication middleware.

        Args:
            app: ASGI application
            jwt_secret: Secret key for JWT verification
            jwt_algorithm: JWT signing algorithm
            public_endpoints: Paths that skip authentication
        """
        self.app = app
        self.jwt_secret = jwt_secret
        self.jwt_algorithm = jwt_algorithm
        self.public_endpoints = set(
            public_endpoints
            if public_endpoints is not None
            else default_public_endpoints(settings.api_prefix)
        )

    async def __call__(self, scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope)

        # CORS preflight and public endpoints
        if request.method == "OPTIONS" or self._is_public_endpoint(request.url.path):
            await self.app(scope, receive, send)
            return

        try:
            user_id, payload = self.authenticate(request)
        except TokenExpiredError:
            response = error_response(
                status.HTTP_401_UNAUTHORIZED,
                "TOKEN_EXPIRED",
                "Authentication token has expired. Please log in again.",
                request.url.path,
                request.method,
                request_id=get_request_id(request),
            )
        except TokenInvalidError as e:
            logger.info(f"Rejected request to {request.url.path}: {e}")
            response = error_response(
                status.HTTP_401_UNAUTHORIZED,
                "UNAUTHENTICATED",
                "Authentication required",
                request.url.path,
                request.method,
                request_id=get_request_id(request),
            )
        else:
            scope["user_id"] = user_id
            scope["jwt_payload"] = payload
            await self.app(scope, receive, send)
            return

        response.headers["WWW-Authenticate"] = "Bearer"
        await response(scope, receive, send)

    def authenticate(self, request: Request) -> tuple[int, dict]:
        """
        Resolve the caller's user id from the request.

        Raises:
            TokenExpiredError: If the token has expired
            TokenInvalidError: If no token or a bad token was sent
        """
        token = self._extract_token(request)
        if not token:
            raise TokenInvalidError("No authentication token provided")

        try:
            payload = verify_jwt_token(token, self.jwt_secret, self.jwt_algorithm)
        except jwt.ExpiredSignatureError:
            raise TokenExpiredError("Token has expired")
        except jwt.InvalidTokenError as e:
            raise TokenInvalidError(f"Invalid token: {e}")

        user_id = payload.get("user_id")
        if not isinstance(user_id, int):
            raise TokenInvalidError("Token missing user_id")
        return user_id, dict(payload)

    def _is_public_endpoint(self, path: str) -> bool:
        if path in self.public_endpoints:
            return True
        public_prefixes = ["/health", "/docs", "/redoc"]
        return any(path.startswith(prefix) for prefix in public_prefixes)

    def _extract_token(self, request: Request) -> Optional[str]:
        auth_header = request.headers.get("Authorization")
        if auth_header and auth_header.startswith("Bearer "):
            return auth_header[7:]
        return None


def get_current_user_id(request: Request) -> int:
    """
    Get the authenticated user id from the request scope.

    Raises:
        AuthenticationError: If the middleware did not authenticate the request
    """
    user_id = request.scope.get("user_id")
    if user_id is None:
        raise AuthenticationError("User not authenticated")
    return user_id
