"""
Cohort session ORM model.

One scheduled class of a cohort, identified by its 1-based session number.
The scheduler owns ``session_date``; the remaining descriptive columns are
edited through single-session updates.

Dependencies: sqlalchemy, cohort_backend.boundary.db.base
System role: Session persistence for cohort scheduling
"""

import enum
from datetime import date
from uuid import UUID

from sqlalchemy import Date, Enum, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cohort_backend.boundary.db.base import Base, UUIDMixin, TimestampMixin


class SessionStatus(str, enum.Enum):
    """
    Session delivery states.

    SCHEDULED: Planned, not yet held
    COMPLETED: Held
    CANCELLED: Will not be held
    RESCHEDULED: Moved by an administrator
    """

    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    RESCHEDULED = "rescheduled"


class CohortSessionModel(Base, UUIDMixin, TimestampMixin):
    """
    Cohort session ORM model.

    Dates are not unique at the database level: a shift-mode cascade moves
    several rows in sequence and may pass through transient collisions
    inside its transaction. Uniqueness per cohort is enforced by the
    scheduler before writing.

    Attributes:
        id: UUID primary key (auto-generated)
        cohort_id: Owning cohort (immutable)
        session_number: Position within the cohort, unique per cohort
        session_date: Calendar date of the session
        topic, instructor, duration_minutes, link, recording_url: Descriptive fields
        status: Delivery state

    Constraints:
        (cohort_id, session_number): UNIQUE
    """

    __tablename__ = "cohort_sessions"
    __table_args__ = (
        UniqueConstraint("cohort_id", "session_number", name="uq_cohort_session_number"),
    )

    cohort_id: Mapped[UUID] = mapped_column(
        ForeignKey("cohorts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    session_number: Mapped[int] = mapped_column(Integer, nullable=False)

    session_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)

    topic: Mapped[str | None] = mapped_column(String(500), nullable=True, default=None)
    instructor: Mapped[str | None] = mapped_column(String(255), nullable=True, default=None)
    duration_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True, default=None)
    link: Mapped[str | None] = mapped_column(String(2048), nullable=True, default=None)
    recording_url: Mapped[str | None] = mapped_column(String(2048), nullable=True, default=None)

    status: Mapped[SessionStatus] = mapped_column(
        Enum(
            SessionStatus,
            native_enum=False,
            values_callable=lambda members: [member.value for member in members],
        ),
        nullable=False,
        default=SessionStatus.SCHEDULED,
    )

    # Relationships
    cohort = relationship("CohortModel", back_populates="sessions")
