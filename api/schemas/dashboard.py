"""Dashboard and activity feed schemas."""

from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, Field


class DashboardMetrics(BaseModel):
    total_applications: int
    active_jobs: int
    scheduled_interviews: int
    time_to_hire_days: Optional[float] = Field(
        None, description="Mean days from application to hire; null with no hires"
    )


class PipelineStat(BaseModel):
    status: str
    count: int


class PipelineCard(BaseModel):
    id: int
    status: str
    stage: str
    candidate_id: int
    candidate_name: str
    job_id: int
    job_title: str
    score: Optional[int] = None
    applied_at: Optional[datetime] = None


class PipelineResponse(BaseModel):
    """Kanban view: counts per status, all cards, and cards per column."""

    stats: list[PipelineStat]
    applications: list[PipelineCard]
    groups: dict[str, list[PipelineCard]]


class ActivityResponse(BaseModel):
    id: int
    user_id: int
    user_name: str
    user_profile_image: Optional[str] = None
    action: str
    entity_type: str
    entity_id: int
    metadata: Optional[dict[str, Any]] = None
    created_at: Optional[datetime] = None
