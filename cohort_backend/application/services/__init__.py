"""Service orchestrators."""

from .cohort_session_service import CohortSessionService
from .rearrangement_service import RearrangementResult, SessionRearrangementService

__all__ = [
    "CohortSessionService",
    "RearrangementResult",
    "SessionRearrangementService",
]
