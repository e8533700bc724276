"""Interview scheduling schemas."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from api.schemas.common import TimestampMixin
from database.models.interviews import InterviewStatus, InterviewType


class InterviewCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    application_id: int = Field(ge=1)
    scheduled_at: datetime
    duration: int = Field(60, ge=1, le=24 * 60, description="Length in minutes")
    type: InterviewType
    status: InterviewStatus = InterviewStatus.SCHEDULED.value
    meeting_url: Optional[str] = Field(None, max_length=2048)
    notes: Optional[str] = None


class InterviewUpdate(BaseModel):
    """Only sent fields are changed."""

    model_config = ConfigDict(use_enum_values=True)

    scheduled_at: Optional[datetime] = None
    duration: Optional[int] = Field(None, ge=1, le=24 * 60)
    type: Optional[InterviewType] = None
    status: Optional[InterviewStatus] = None
    meeting_url: Optional[str] = Field(None, max_length=2048)
    notes: Optional[str] = None
    feedback: Optional[str] = None
    rating: Optional[int] = Field(None, ge=1, le=5)


class InterviewResponse(TimestampMixin):
    model_config = ConfigDict(from_attributes=True)

    id: int
    application_id: int
    interviewer_id: int
    scheduled_at: datetime
    duration: int
    type: str
    status: str
    meeting_url: Optional[str] = None
    notes: Optional[str] = None
    feedback: Optional[str] = None
    rating: Optional[int] = None


class InterviewSummary(BaseModel):
    """Interview joined with candidate, job and interviewer names."""

    id: int
    application_id: int
    scheduled_at: datetime
    duration: int
    type: str
    status: str
    candidate_name: str
    job_title: str
    interviewer_name: str
