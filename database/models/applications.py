"""
Application Models

An application pairs one candidate with one job and carries the pipeline
status the kanban view is built from. Notes belong to an application.
"""

from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import (
    String,
    Boolean,
    ForeignKey,
    BigInteger,
    Integer,
    DateTime,
    func,
    Text,
    Index,
)
from database.engine import Base, BigIntId
from core.pipeline import INITIAL_STATUS, PipelineStatus
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from database.models.candidates import Candidate
    from database.models.jobs import Job
    from database.models.interviews import Interview


class Application(Base):
    """A candidate's submission to a job."""

    __tablename__ = "applications"
    __table_args__ = (
        Index("idx_applications_status_applied", "status", "applied_at"),
    )

    id: Mapped[int] = mapped_column(
        BigIntId, primary_key=True, nullable=False, autoincrement=True
    )

    # References (immutable after creation)
    candidate_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("candidates.id"), nullable=False, index=True
    )
    job_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("jobs.id"), nullable=False, index=True
    )

    # Pipeline status is stored as written; see PipelineStatus.parse for reads
    status: Mapped[str] = mapped_column(
        String(50), nullable=False, default=INITIAL_STATUS.value
    )
    score: Mapped[int | None] = mapped_column(Integer)  # 0-100
    source: Mapped[str | None] = mapped_column(String(100))
    assigned_to: Mapped[int | None] = mapped_column(
        BigInteger, ForeignKey("users.id"), nullable=True
    )

    # Bumped on every status write; compared only when a caller opts in
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    # Timestamps
    applied_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    # Relationships
    candidate: Mapped["Candidate"] = relationship(
        "Candidate", back_populates="applications"
    )
    job: Mapped["Job"] = relationship("Job", back_populates="applications")
    interviews: Mapped[list["Interview"]] = relationship(
        "Interview", back_populates="application", cascade="all, delete-orphan"
    )
    notes: Mapped[list["Note"]] = relationship(
        "Note", back_populates="application", cascade="all, delete-orphan"
    )

    @property
    def stage(self) -> PipelineStatus:
        return PipelineStatus.parse(self.status)


class Note(Base):
    """Free-text note left on an application by a team member."""

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(
        BigIntId, primary_key=True, nullable=False, autoincrement=True
    )
    application_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("applications.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    author_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("users.id"), nullable=False
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    is_private: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    # Relationships
    application: Mapped["Application"] = relationship(
        "Application", back_populates="notes"
    )
