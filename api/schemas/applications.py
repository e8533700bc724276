"""Application, status transition and note schemas."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class ApplicationCreate(BaseModel):
    """Schema for submitting a candidate to a job."""

    candidate_id: int = Field(ge=1)
    job_id: int = Field(ge=1)
    status: str = Field("applied", min_length=1, max_length=50)
    score: Optional[int] = Field(None, ge=0, le=100, description="Matching score 0-100")
    source: Optional[str] = Field(None, max_length=100, description="Job board, referral, ...")


class ApplicationStatusUpdate(BaseModel):
    """
    Move an application to another pipeline column.

    Any non-empty status string is accepted. Sending ``expected_version``
    makes the write conditional on the stored version.
    """

    status: str = Field(min_length=1, max_length=50)
    expected_version: Optional[int] = Field(None, ge=1)


class ApplicationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    candidate_id: int
    job_id: int
    status: str
    score: Optional[int] = None
    source: Optional[str] = None
    assigned_to: Optional[int] = None
    version: int
    applied_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ApplicationDetail(BaseModel):
    """Application with read-time candidate and job fields."""

    id: int
    status: str
    stage: str
    score: Optional[int] = None
    applied_at: Optional[datetime] = None
    candidate_id: int
    candidate_name: str
    candidate_email: Optional[str] = None
    job_id: int
    job_title: str


class NoteCreate(BaseModel):
    content: str = Field(min_length=1)
    is_private: bool = False


class NoteResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    application_id: int
    author_id: int
    content: str
    is_private: bool
    created_at: Optional[datetime] = None
