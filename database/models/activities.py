"""
Activity Models

Append-only audit trail of user actions shown in the team activity feed.
Rows are inserted and read, never updated or deleted. The entity reference
is a weak pointer: it is not a foreign key and is never checked against the
referenced table.
"""

from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import (
    String,
    BigInteger,
    ForeignKey,
    DateTime,
    func,
    JSON,
    Index,
)
from database.engine import Base, BigIntId
from dataclasses import dataclass
from datetime import datetime
from enum import Enum as PyEnum
from typing import Any


class EntityType(str, PyEnum):
    """Kinds of record an activity can point at."""

    APPLICATION = "application"
    CANDIDATE = "candidate"
    JOB = "job"
    INTERVIEW = "interview"
    NOTE = "note"

    # Stored values written by older clients
    OTHER = "other"

    @classmethod
    def parse(cls, value: str) -> "EntityType":
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


class ActivityAction(str, PyEnum):
    """Action tags written by this service. Stored actions are free-form."""

    MOVED_CANDIDATE = "moved_candidate"
    POSTED_JOB = "posted_job"
    SCHEDULED_INTERVIEW = "scheduled_interview"


@dataclass(frozen=True)
class EntityRef:
    """Weak, typed reference to the record an activity is about."""

    entity_type: EntityType
    entity_id: int

    @classmethod
    def application(cls, entity_id: int) -> "EntityRef":
        return cls(EntityType.APPLICATION, entity_id)

    @classmethod
    def job(cls, entity_id: int) -> "EntityRef":
        return cls(EntityType.JOB, entity_id)

    @classmethod
    def interview(cls, entity_id: int) -> "EntityRef":
        return cls(EntityType.INTERVIEW, entity_id)


class Activity(Base):
    """One user action."""

    __tablename__ = "activities"
    __table_args__ = (
        Index("idx_activities_entity", "entity_type", "entity_id"),
    )

    id: Mapped[int] = mapped_column(
        BigIntId, primary_key=True, nullable=False, autoincrement=True
    )
    user_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("users.id"), nullable=False, index=True
    )
    action: Mapped[str] = mapped_column(String(100), nullable=False)

    # Weak reference, no foreign key
    entity_type: Mapped[str] = mapped_column(String(50), nullable=False)
    entity_id: Mapped[int] = mapped_column(BigInteger, nullable=False)

    # "metadata" is reserved on declarative classes
    details: Mapped[dict[str, Any] | None] = mapped_column("metadata", JSON)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), index=True
    )

    @property
    def entity(self) -> EntityRef:
        return EntityRef(EntityType.parse(self.entity_type), self.entity_id)
