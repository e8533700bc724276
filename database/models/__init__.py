"""Import every model so Base.metadata knows all tables."""

from database.models.users import User, UserRole
from database.models.jobs import Job, JobStatus, EmploymentType
from database.models.candidates import Candidate
from database.models.applications import Application, Note
from database.models.interviews import Interview, InterviewStatus, InterviewType
from database.models.activities import (
    Activity,
    ActivityAction,
    EntityRef,
    EntityType,
)

__all__ = [
    "User",
    "UserRole",
    "Job",
    "JobStatus",
    "EmploymentType",
    "Candidate",
    "Application",
    "Note",
    "Interview",
    "InterviewStatus",
    "InterviewType",
    "Activity",
    "ActivityAction",
    "EntityRef",
    "EntityType",
]
