"""
Database models package.

Exports:
  - CohortModel, CohortStatus: Cohort ORM model and status enum
  - CohortSessionModel, SessionStatus: Session ORM model and status enum

Dependencies: sqlalchemy, cohort_backend.boundary.db.base
System role: Database model definitions for domain entities
"""

from cohort_backend.boundary.db.models.cohort_model import CohortModel, CohortStatus
from cohort_backend.boundary.db.models.cohort_session_model import (
    CohortSessionModel,
    SessionStatus,
)

__all__ = [
    "CohortModel",
    "CohortStatus",
    "CohortSessionModel",
    "SessionStatus",
]
