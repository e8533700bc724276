"""Common Pydantic schemas shared across the API."""

from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, Field


class TimestampMixin(BaseModel):
    """Mixin for timestamp fields."""

    created_at: Optional[datetime] = Field(None, description="Timestamp when the resource was created")
    updated_at: Optional[datetime] = Field(None, description="Timestamp when the resource was last updated")


class FieldError(BaseModel):
    """One field-level validation failure."""

    field: str
    message: str
    type: str


class ErrorBody(BaseModel):
    """Error payload."""

    code: str = Field(description="Error code for programmatic handling")
    message: str = Field(description="Human-readable message")
    path: str
    method: str
    details: Optional[Any] = Field(None, description="Field errors or debug details")
    request_id: Optional[str] = None


class ErrorResponse(BaseModel):
    """Error response model."""

    error: ErrorBody
