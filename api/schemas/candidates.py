"""Candidate-related Pydantic schemas."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from api.schemas.common import TimestampMixin


class CandidateBase(BaseModel):
    """Base candidate schema."""

    email: EmailStr
    first_name: str = Field(min_length=1, max_length=100, description="Candidate's first name")
    last_name: str = Field(min_length=1, max_length=100, description="Candidate's last name")
    phone: Optional[str] = Field(None, max_length=20, description="Contact phone number")
    location: Optional[str] = Field(None, max_length=255, description="Geographic location")
    resume_url: Optional[str] = Field(None, max_length=2048, description="URL to candidate's resume")
    linkedin_url: Optional[str] = Field(None, max_length=2048, description="LinkedIn profile URL")
    portfolio_url: Optional[str] = Field(None, max_length=2048, description="Portfolio website URL")
    skills: list[str] = Field(default_factory=list, description="Skill tags")
    experience: Optional[str] = Field(None, description="Free-text work history")
    education: Optional[str] = Field(None, description="Free-text education history")
    notes: Optional[str] = Field(None, description="Recruiter notes")

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def strip_names(cls, v: str) -> str:
        """Strip whitespace from name fields."""
        if isinstance(v, str):
            return v.strip()
        return v


class CandidateCreate(CandidateBase):
    """Schema for creating a candidate."""


class CandidateUpdate(BaseModel):
    """Schema for updating a candidate. Only sent fields are changed."""

    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=20)
    location: Optional[str] = Field(None, max_length=255)
    resume_url: Optional[str] = Field(None, max_length=2048)
    linkedin_url: Optional[str] = Field(None, max_length=2048)
    portfolio_url: Optional[str] = Field(None, max_length=2048)
    skills: Optional[list[str]] = None
    experience: Optional[str] = None
    education: Optional[str] = None
    notes: Optional[str] = None


class CandidateResponse(CandidateBase, TimestampMixin):
    """Schema for candidate response."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(description="Unique candidate identifier")
    email: str
