"""Job posting schemas."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from api.schemas.common import TimestampMixin
from database.models.jobs import EmploymentType, JobStatus


class JobCreate(BaseModel):
    """Schema for posting a job."""

    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    department: Optional[str] = Field(None, max_length=100)
    location: Optional[str] = Field(None, max_length=255)
    type: EmploymentType = Field(description="full-time, part-time or contract")
    status: JobStatus = JobStatus.ACTIVE
    salary: Optional[str] = Field(None, max_length=100)
    requirements: Optional[str] = None
    benefits: Optional[str] = None


class JobUpdate(BaseModel):
    """Schema for updating a job. Only sent fields are changed."""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    department: Optional[str] = Field(None, max_length=100)
    location: Optional[str] = Field(None, max_length=255)
    type: Optional[EmploymentType] = None
    status: Optional[JobStatus] = None
    salary: Optional[str] = Field(None, max_length=100)
    requirements: Optional[str] = None
    benefits: Optional[str] = None


class JobResponse(TimestampMixin):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    department: Optional[str] = None
    location: Optional[str] = None
    type: str
    status: str
    salary: Optional[str] = None
    requirements: Optional[str] = None
    benefits: Optional[str] = None
    posted_by: Optional[int] = None
