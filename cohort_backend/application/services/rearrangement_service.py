"""
Bulk session rearrangement orchestrator.

Recomputes every session date of a cohort from a start date on the weekly
pattern and writes the result back in one transaction.

Dependencies: cohort_backend.boundary.db.CRUD, cohort_backend.core
System role: Bulk rearrangement use case orchestration
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from cohort_backend.boundary.db.CRUD.cohort_crud import cohort_crud
from cohort_backend.boundary.db.CRUD.cohort_session_crud import cohort_session_crud
from cohort_backend.boundary.db.models.cohort_model import CohortModel
from cohort_backend.boundary.db.models.cohort_session_model import CohortSessionModel
from cohort_backend.core.exceptions import (
    CohortNotFoundError,
    InvalidInputError,
    NoSessionsError,
    PartialWriteError,
)
from cohort_backend.core.schedule_pattern import ScheduledSession, WeeklyPattern

logger = logging.getLogger(__name__)


@dataclass
class RearrangementResult:
    """Outcome of a bulk rearrangement."""

    cohort_id: UUID
    cohort_name: str
    start_date: date
    schedule: list[ScheduledSession]
    persisted: bool

    @property
    def end_date(self) -> date:
        return self.schedule[-1].session_date


class SessionRearrangementService:
    """Bulk rearrangement orchestrator."""

    def __init__(
        self,
        db: AsyncSession,
        pattern: WeeklyPattern | None = None,
        default_fixed_dates: Mapping[int, date] | None = None,
    ) -> None:
        """
        Initialize rearrangement service.

        Args:
            db: Async SQLAlchemy session
            pattern: Weekly slot pattern (Mon/Wed/Fri when omitted)
            default_fixed_dates: Pinned dates used when a request brings none
        """
        self.db = db
        self.pattern = pattern or WeeklyPattern()
        self.default_fixed_dates = dict(default_fixed_dates or {})

    async def resolve_cohort(
        self,
        cohort_id: UUID | None = None,
        cohort_name: str | None = None,
    ) -> CohortModel:
        """
        Find a cohort by id, falling back to name.

        Raises:
            InvalidInputError: If neither identifier is given
            CohortNotFoundError: If nothing matches
        """
        if cohort_id is None and not cohort_name:
            raise InvalidInputError("Either cohortId or cohortName is required", field="cohortId")

        if cohort_id is not None:
            cohort = await cohort_crud.get_by_id(self.db, cohort_id)
        else:
            cohort = await cohort_crud.get_by_name(self.db, cohort_name)

        if cohort is None:
            raise CohortNotFoundError(
                cohort_id=str(cohort_id) if cohort_id else None,
                cohort_name=cohort_name,
            )
        return cohort

    async def rearrange(
        self,
        start_date: date,
        cohort_id: UUID | None = None,
        cohort_name: str | None = None,
        fixed_dates: Mapping[int, date] | None = None,
        dry_run: bool = False,
    ) -> RearrangementResult:
        """
        Recompute and persist dates for all sessions of a cohort.

        Re-running with the same inputs against unchanged sessions yields the
        same schedule, so a failed run is recovered by running it again.

        Args:
            start_date: Requested date of the first session
            cohort_id: Cohort UUID (takes precedence over name)
            cohort_name: Cohort name
            fixed_dates: Pinned dates by session number; configuration
                defaults apply when None
            dry_run: Compute only, write nothing

        Returns:
            RearrangementResult: Computed schedule and whether it was written

        Raises:
            InvalidInputError: Missing identifiers or inconsistent fixed dates
            CohortNotFoundError: Cohort not found
            NoSessionsError: Cohort has no sessions
            PartialWriteError: A session write failed (everything rolled back)
        """
        cohort = await self.resolve_cohort(cohort_id, cohort_name)
        sessions = await cohort_session_crud.get_by_cohort(self.db, cohort.id)
        if not sessions:
            raise NoSessionsError(str(cohort.id))

        pins = self.default_fixed_dates if fixed_dates is None else fixed_dates
        schedule = self.pattern.build_schedule(
            [s.session_number for s in sessions],
            start_date,
            pins,
        )

        logger.info(
            "Session schedule computed",
            extra={
                "cohort_id": str(cohort.id),
                "session_count": len(schedule),
                "start_date": start_date.isoformat(),
                "end_date": schedule[-1].session_date.isoformat(),
                "fixed_sessions": sorted(pins),
                "dry_run": dry_run,
            },
        )
        for entry in schedule:
            logger.debug(
                f"Session {entry.session_number}: {entry.session_date.isoformat()} ({entry.day})"
            )

        if not dry_run:
            await self._persist(sessions, schedule)

        return RearrangementResult(
            cohort_id=cohort.id,
            cohort_name=cohort.name,
            start_date=start_date,
            schedule=schedule,
            persisted=not dry_run,
        )

    async def _persist(
        self,
        sessions: Sequence[CohortSessionModel],
        schedule: Sequence[ScheduledSession],
    ) -> None:
        """
        Write every computed date inside one transaction.

        Each row is written independently of the others and in no
        meaningful order; any failure rolls all of them back.
        """
        ids_by_number = {s.session_number: s.id for s in sessions}
        failures: list[dict[str, Any]] = []

        try:
            for entry in schedule:
                session_id = ids_by_number[entry.session_number]
                try:
                    updated = await cohort_session_crud.update_date(
                        self.db, session_id, entry.session_date
                    )
                except SQLAlchemyError as e:
                    # The transaction is unusable after a database error.
                    failures.append(_failure(session_id, entry.session_number, str(e)))
                    break
                if not updated:
                    failures.append(
                        _failure(session_id, entry.session_number, "Session no longer exists")
                    )

            if failures:
                raise PartialWriteError(
                    f"Failed to update {len(failures)} session(s)",
                    failures=failures,
                )

            await self.db.commit()
        except Exception as e:
            logger.error(
                "Failed to persist session schedule",
                extra={"error": str(e), "failed_sessions": len(failures)},
            )
            await self.db.rollback()
            raise

        logger.info("Session schedule persisted", extra={"sessions_updated": len(schedule)})


def _failure(session_id: UUID, session_number: int, reason: str) -> dict[str, Any]:
    return {
        "session_id": str(session_id),
        "session_number": session_number,
        "reason": reason,
    }
