"""
Domain exceptions surfaced to API clients.

Each exception carries the HTTP status and error code the error handlers
render. Handlers never build these codes themselves.
"""

from typing import Any, Optional


class ATSError(Exception):
    """Base exception for all service-level errors."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    default_message: str = "An unexpected error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[list[dict[str, Any]]] = None,
    ):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class ValidationError(ATSError):
    """Raised when input is malformed or a required field is missing."""

    status_code = 400
    code = "VALIDATION_ERROR"
    default_message = "Request validation failed"

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls(
            message=message,
            details=[{"field": field, "message": message, "type": "value_error"}],
        )


class AuthError(ATSError):
    """Raised when the caller has no valid credential."""

    status_code = 401
    code = "UNAUTHENTICATED"
    default_message = "Authentication required"


class NotFoundError(ATSError):
    """Raised when a referenced record does not exist."""

    status_code = 404
    code = "NOT_FOUND"
    default_message = "Resource not found"

    def __init__(self, resource: str, resource_id: Any = None):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} not found")


class ConflictError(ATSError):
    """Raised when a write conflicts with the stored state."""

    status_code = 409
    code = "CONFLICT"
    default_message = "The resource was modified by another request"


class InternalError(ATSError):
    """Raised on storage faults or other unexpected failures."""

    status_code = 500
    code = "INTERNAL_ERROR"
    default_message = "An unexpected error occurred"
