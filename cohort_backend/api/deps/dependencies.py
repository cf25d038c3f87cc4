"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: cohort_backend.configs, cohort_backend.application, cohort_backend.boundary
System role: DI container for service injection
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cohort_backend.configs import Settings, get_settings
from cohort_backend.boundary.db import get_async_db
from cohort_backend.application.services import (
    CohortSessionService,
    SessionRearrangementService,
)
from cohort_backend.core.schedule_pattern import WeeklyPattern


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


@lru_cache
def get_weekly_pattern() -> WeeklyPattern:
    """Get the configured weekly session pattern."""
    return WeeklyPattern(get_settings().scheduler.working_weekdays)


def get_rearrangement_service(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings_dependency),
) -> SessionRearrangementService:
    """
    Get bulk rearrangement service instance.

    Args:
        db: Async database session (injected via Depends)
        settings: Application settings (injected via Depends)

    Returns:
        SessionRearrangementService: Service using the configured pattern
            and fixed session dates
    """
    return SessionRearrangementService(
        db=db,
        pattern=get_weekly_pattern(),
        default_fixed_dates=settings.scheduler.fixed_session_dates,
    )


def get_cohort_session_service(db: AsyncSession = Depends(get_async_db)) -> CohortSessionService:
    """
    Get cohort session service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        CohortSessionService: Session service instance
    """
    return CohortSessionService(db=db)
