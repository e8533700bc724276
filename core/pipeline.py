"""
Recruitment pipeline model.

Applications move through the stages applied -> screening -> interview ->
decision -> hired | rejected. Stored statuses are free-form strings: no
transition table is enforced and unknown values are kept as-is. This module
holds the stage enum and the read-time projection that groups applications
into pipeline columns.
"""

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum as PyEnum
from typing import Any, Iterable, Optional


class PipelineStatus(str, PyEnum):
    """Known pipeline stages, in progression order."""

    APPLIED = "applied"
    SCREENING = "screening"
    INTERVIEW = "interview"
    DECISION = "decision"
    HIRED = "hired"
    REJECTED = "rejected"

    # Any stored value that is not one of the stages above
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Optional[str]) -> "PipelineStatus":
        """Map a stored status string to a stage, falling back to UNKNOWN."""
        if value is None:
            return cls.UNKNOWN
        try:
            member = cls(value)
        except ValueError:
            return cls.UNKNOWN
        return member

    @property
    def is_terminal(self) -> bool:
        return self in (PipelineStatus.HIRED, PipelineStatus.REJECTED)


INITIAL_STATUS = PipelineStatus.APPLIED

# Column order for the known stages
STAGE_ORDER: tuple[PipelineStatus, ...] = (
    PipelineStatus.APPLIED,
    PipelineStatus.SCREENING,
    PipelineStatus.INTERVIEW,
    PipelineStatus.DECISION,
    PipelineStatus.HIRED,
    PipelineStatus.REJECTED,
)


@dataclass(frozen=True)
class PipelineApplication:
    """An application row enriched with read-time candidate and job names."""

    id: int
    status: str
    candidate_id: int
    job_id: int
    applied_at: Optional[datetime]
    candidate_name: str = ""
    job_title: str = ""
    score: Optional[int] = None

    @property
    def stage(self) -> PipelineStatus:
        return PipelineStatus.parse(self.status)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "status": self.status,
            "stage": self.stage.value,
            "candidate_id": self.candidate_id,
            "candidate_name": self.candidate_name,
            "job_id": self.job_id,
            "job_title": self.job_title,
            "score": self.score,
            "applied_at": self.applied_at.isoformat() if self.applied_at else None,
        }


@dataclass(frozen=True)
class PipelineProjection:
    """Applications grouped by status, with per-status counts."""

    counts: dict[str, int] = field(default_factory=dict)
    groups: dict[str, list[PipelineApplication]] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def stats(self) -> list[dict[str, Any]]:
        """Counts as a list of {status, count}, in column order."""
        return [
            {"status": status, "count": self.counts[status]}
            for status in ordered_statuses(self.counts)
        ]


def ordered_statuses(statuses: Iterable[str]) -> list[str]:
    """Known stages in pipeline order, then any other statuses alphabetically."""
    present = set(statuses)
    known = [stage.value for stage in STAGE_ORDER if stage.value in present]
    others = sorted(present - set(known))
    return known + others


def _applied_key(application: PipelineApplication) -> float:
    if application.applied_at is None:
        return float("-inf")
    return application.applied_at.timestamp()


def sort_most_recent_first(
    applications: Iterable[PipelineApplication],
) -> list[PipelineApplication]:
    """Order by applied_at descending; equal timestamps keep id ascending."""
    by_id = sorted(applications, key=lambda a: a.id)
    return sorted(by_id, key=_applied_key, reverse=True)


def project(applications: Iterable[PipelineApplication]) -> PipelineProjection:
    """
    Group applications by status and count each group.

    Operates on the full, unfiltered list. Every input application lands in
    exactly one group, so group sizes always sum to the input length.

    Args:
        applications: All application rows with joined names

    Returns:
        PipelineProjection with counts and per-status ordered groups
    """
    rows = list(applications)
    counts = Counter(row.status for row in rows)

    groups: dict[str, list[PipelineApplication]] = {}
    for row in sort_most_recent_first(rows):
        groups.setdefault(row.status, []).append(row)

    ordered = ordered_statuses(counts)
    return PipelineProjection(
        counts={status: counts[status] for status in ordered},
        groups={status: groups[status] for status in ordered},
    )
