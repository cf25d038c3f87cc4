"""
Cohort ORM model.

A named group of students progressing through a shared series of sessions.

Dependencies: sqlalchemy, cohort_backend.boundary.db.base
System role: Cohort persistence; owner of cohort sessions
"""

import enum
from datetime import date

from sqlalchemy import Date, Enum, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cohort_backend.boundary.db.base import Base, UUIDMixin, TimestampMixin


class CohortStatus(str, enum.Enum):
    """
    Cohort lifecycle states.

    UPCOMING: Sessions not started yet
    ACTIVE: Sessions in progress
    COMPLETED: Every session completed
    """

    UPCOMING = "Upcoming"
    ACTIVE = "Active"
    COMPLETED = "Completed"


class CohortModel(Base, UUIDMixin, TimestampMixin):
    """
    Cohort ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        name: Unique cohort name, used as an alternative lookup key
        level: Programme level label (optional)
        status: Lifecycle state, flipped to COMPLETED by session updates
        start_date: Planned first day (optional)
        end_date: Planned last day (optional)
        sessions: CohortSessionModel rows ordered by session_number

    Relationships:
        sessions: One-to-many with CohortSessionModel (cascade delete)
    """

    __tablename__ = "cohorts"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        doc="Cohort name",
    )

    level: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
        default=None,
        doc="Programme level",
    )

    status: Mapped[CohortStatus] = mapped_column(
        Enum(
            CohortStatus,
            native_enum=False,
            values_callable=lambda members: [member.value for member in members],
        ),
        nullable=False,
        default=CohortStatus.UPCOMING,
    )

    start_date: Mapped[date | None] = mapped_column(Date, nullable=True, default=None)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True, default=None)

    # Relationships
    sessions = relationship(
        "CohortSessionModel",
        back_populates="cohort",
        cascade="all, delete-orphan",
        order_by="CohortSessionModel.session_number",
    )
