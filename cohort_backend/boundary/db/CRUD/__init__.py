"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from cohort_backend.boundary.db.CRUD import cohort_crud, cohort_session_crud

    # Use singleton instances
    cohort = await cohort_crud.get_by_name(db, "Cohort 1")
    sessions = await cohort_session_crud.get_by_cohort(db, cohort.id)
"""

from cohort_backend.boundary.db.CRUD.base_crud import BaseCRUD
from cohort_backend.boundary.db.CRUD.cohort_crud import CohortCRUD, cohort_crud
from cohort_backend.boundary.db.CRUD.cohort_session_crud import (
    CohortSessionCRUD,
    cohort_session_crud,
)

__all__ = [
    "BaseCRUD",
    "CohortCRUD",
    "cohort_crud",
    "CohortSessionCRUD",
    "cohort_session_crud",
]
