"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management
  - CohortModel, CohortSessionModel: Core domain entities
  - CohortStatus, SessionStatus: Enum types for state tracking
  - cohort_crud, cohort_session_crud: CRUD operation singletons

Dependencies: sqlalchemy, cohort_backend.configs
System role: Database adapter providing persistent storage for cohorts and
their scheduled sessions.
"""

from cohort_backend.boundary.db.base import Base, TimestampMixin, UUIDMixin
from cohort_backend.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from cohort_backend.boundary.db.models import (
    CohortModel,
    CohortStatus,
    CohortSessionModel,
    SessionStatus,
)
from cohort_backend.boundary.db.CRUD import (
    BaseCRUD,
    CohortCRUD,
    CohortSessionCRUD,
    cohort_crud,
    cohort_session_crud,
)

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    # Connection
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "CohortModel",
    "CohortStatus",
    "CohortSessionModel",
    "SessionStatus",
    # CRUD classes
    "BaseCRUD",
    "CohortCRUD",
    "CohortSessionCRUD",
    # CRUD singletons
    "cohort_crud",
    "cohort_session_crud",
]
