"""
Error handling with sanitized, uniformly shaped error responses.

Every error body has the form::

    {"error": {"code": ..., "message": ..., "path": ..., "method": ...,
               "details": [...], "request_id": ...}}

Domain exceptions (core.exceptions) carry their own status and code.
Storage faults become a generic 500 and are logged server-side only.
"""

import logging
import re
import traceback
from typing import Any, Callable, Optional

from fastapi import Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.exceptions import ATSError

logger = logging.getLogger(__name__)

# Patterns for sensitive data that should never reach clients or logs
SENSITIVE_PATTERNS = [
    re.compile(r'password["\s:=]+[^"\s,}]+', re.IGNORECASE),
    re.compile(r'token["\s:=]+[^"\s,}]+', re.IGNORECASE),
    re.compile(r'api[_-]?key["\s:=]+[^"\s,}]+', re.IGNORECASE),
    re.compile(r'secret["\s:=]+[^"\s,}]+', re.IGNORECASE),
    re.compile(r'authorization["\s:]+[^"\s,}]+', re.IGNORECASE),
]


def sanitize_error_message(message: Any) -> str:
    """
    Remove sensitive information from error messages.

    Args:
        message: Original error message

    Returns:
        Sanitized error message
    """
    sanitized = str(message)
    for pattern in SENSITIVE_PATTERNS:
        sanitized = pattern.sub("[REDACTED]", sanitized)
    return sanitized


def get_safe_error_details(exc: Exception, include_traceback: bool = False) -> dict[str, Any]:
    """Describe an exception without exposing sensitive values."""
    details = {
        "type": type(exc).__name__,
        "message": sanitize_error_message(str(exc)),
    }
    if include_traceback:
        details["traceback"] = sanitize_error_message(
            "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        )
    return details


def format_validation_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """Flatten pydantic errors into [{field, message, type}]."""
    errors = []
    for error in exc.errors():
        # Drop the leading "body"/"query"/"path" segment from the location
        loc = [str(part) for part in error.get("loc", ())]
        if len(loc) > 1 and loc[0] in ("body", "query", "path"):
            loc = loc[1:]
        errors.append(
            {
                "field": ".".join(loc),
                "message": sanitize_error_message(error.get("msg", "")),
                "type": error.get("type", "value_error"),
            }
        )
    return errors


def error_response(
    status_code: int,
    code: str,
    message: str,
    path: str,
    method: str,
    details: Optional[Any] = None,
    request_id: Optional[str] = None,
) -> JSONResponse:
    """Build the JSON error body shared by every handler."""
    body: dict[str, Any] = {
        "code": code,
        "message": message,
        "path": path,
        "method": method,
    }
    if details is not None:
        body["details"] = details
    if request_id:
        body["request_id"] = request_id
    return JSONResponse(status_code=status_code, content={"error": body})


def get_request_id(request: Request) -> Optional[str]:
    return getattr(request.state, "request_id", None) or request.headers.get("x-request-id")


class ErrorHandlingMiddleware:
    """
    Last-resort handler for exceptions that no registered handler caught.

    Sits inside the logging middleware so failures are still logged with
    their final status code.
    """

    def __init__(self, app: Callable, debug: bool = False):
        self.app = app
        self.debug = debug

    async def __call__(self, scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        try:
            await self.app(scope, receive, send)
        except Exception as exc:
            response = self._handle_exception(exc, scope)
            await response(scope, receive, send)

    def _handle_exception(self, exc: Exception, scope: dict) -> Response:
        path = scope.get("path", "unknown")
        method = scope.get("method", "unknown")
        details = None

        if isinstance(exc, ATSError):
            status_code, code, message = exc.status_code, exc.code, exc.message
            details = exc.details
        elif isinstance(exc, SQLAlchemyError):
            status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
            code = "INTERNAL_ERROR"
            message = "A storage error occurred"
            logger.error(f"Storage error: {method} {path}", exc_info=exc)
        else:
            status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
            code = "INTERNAL_ERROR"
            message = "An unexpected error occurred"
            logger.error(
                f"Unhandled exception: {method} {path} - "
                f"{type(exc).__name__}: {sanitize_error_message(str(exc))}",
                exc_info=exc,
            )

        if self.debug and status_code >= 500:
            details = get_safe_error_details(exc, include_traceback=True)

        request_id = None
        for key, value in scope.get("headers", []):
            if key == b"x-request-id":
                request_id = value.decode()

        return error_response(status_code, code, message, path, method, details, request_id)


def setup_error_handlers(app, debug: bool = False):
    """
    Register exception handlers on a FastAPI application.

    Args:
        app: FastAPI application instance
        debug: Include exception details in 500 responses
    """

    @app.exception_handler(ATSError)
    async def ats_error_handler(request: Request, exc: ATSError):
        if exc.status_code >= 500:
            logger.error(
                f"{exc.code}: {request.method} {request.url.path} - {exc.message}",
                exc_info=exc,
            )
        else:
            logger.info(
                f"{exc.code}: {request.method} {request.url.path} - {exc.message}"
            )
        details = exc.details
        if debug and exc.status_code >= 500:
            details = get_safe_error_details(exc, include_traceback=True)
        return error_response(
            exc.status_code,
            exc.code,
            sanitize_error_message(exc.message),
            request.url.path,
            request.method,
            details,
            get_request_id(request),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = format_validation_errors(exc)
        logger.info(
            f"Validation error: {request.method} {request.url.path} - {errors}"
        )
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            "VALIDATION_ERROR",
            "Request validation failed",
            request.url.path,
            request.method,
            errors,
            get_request_id(request),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        codes = {
            400: "VALIDATION_ERROR",
            401: "UNAUTHENTICATED",
            403: "FORBIDDEN",
            404: "NOT_FOUND",
            405: "METHOD_NOT_ALLOWED",
            409: "CONFLICT",
        }
        response = error_response(
            exc.status_code,
            codes.get(exc.status_code, "HTTP_EXCEPTION"),
            sanitize_error_message(exc.detail),
            request.url.path,
            request.method,
            request_id=get_request_id(request),
        )
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError):
        logger.warning(
            f"Integrity error: {request.method} {request.url.path} - "
            f"{sanitize_error_message(str(exc.orig))}"
        )
        return error_response(
            status.HTTP_409_CONFLICT,
            "CONFLICT",
            "The request conflicts with existing data",
            request.url.path,
            request.method,
            request_id=get_request_id(request),
        )

    @app.exception_handler(SQLAlchemyError)
    async def storage_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error(
            f"Storage error: {request.method} {request.url.path}",
            exc_info=exc,
        )
        details = get_safe_error_details(exc, include_traceback=True) if debug else None
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "INTERNAL_ERROR",
            "A storage error occurred",
            request.url.path,
            request.method,
            details,
            get_request_id(request),
        )
