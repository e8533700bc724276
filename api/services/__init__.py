"""
API Services Layer.

Database operations behind the API endpoints. Every function takes the
request's AsyncSession as its first argument.
"""

from api.services.activities import (
    record as record_activity,
    list_recent as list_recent_activities,
)

from api.services.applications import (
    get_application,
    create_application,
    transition_status,
    list_application_details,
    list_notes,
    add_note,
)

from api.services.candidates import (
    get_candidate,
    list_candidates,
    create_candidate,
    update_candidate,
)

from api.services.dashboard import (
    get_metrics,
    get_recent_applications,
    get_pipeline,
)

from api.services.interviews import (
    get_interview,
    list_interviews,
    list_today,
    list_upcoming,
    schedule_interview,
    update_interview,
)

from api.services.jobs import (
    get_job,
    list_jobs,
    create_job,
    update_job,
)

from api.services.users import (
    get_user,
    create_user,
    authenticate_user,
)

__all__ = [
    # Activities
    "record_activity",
    "list_recent_activities",
    # Applications
    "get_application",
    "create_application",
    "transition_status",
    "list_application_details",
    "list_notes",
    "add_note",
    # Candidates
    "get_candidate",
    "list_candidates",
    "create_candidate",
    "update_candidate",
    # Dashboard
    "get_metrics",
    "get_recent_applications",
    "get_pipeline",
    # Interviews
    "get_interview",
    "list_interviews",
    "list_today",
    "list_upcoming",
    "schedule_interview",
    "update_interview",
    # Jobs
    "get_job",
    "list_jobs",
    "create_job",
    "update_job",
    # Users
    "get_user",
    "create_user",
    "authenticate_user",
]
