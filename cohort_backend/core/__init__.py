"""
Core business logic module.

Contains the scheduling rules and the exception hierarchy. Everything here
is pure: no database, no HTTP.
"""

from cohort_backend.core.exceptions import (
    CohortSchedulerException,
    InvalidInputError,
    CohortNotFoundError,
    NoSessionsError,
    SessionNotFoundError,
    ScheduleConflictError,
    PartialWriteError,
)
from cohort_backend.core.schedule_pattern import ScheduledSession, WeeklyPattern
from cohort_backend.core.session_shift import UpdateMode

__all__ = [
    # Exceptions
    "CohortSchedulerException",
    "InvalidInputError",
    "CohortNotFoundError",
    "NoSessionsError",
    "SessionNotFoundError",
    "ScheduleConflictError",
    "PartialWriteError",
    # Scheduling
    "ScheduledSession",
    "WeeklyPattern",
    "UpdateMode",
]
