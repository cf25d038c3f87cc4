"""
Cohort session service orchestrator.

Coordinates single-session updates (with conflict detection and shift-mode
cascades), cohort-wide link updates, the cohort completion side effect, and
session listing.

Dependencies: cohort_backend.boundary.db.CRUD, cohort_backend.core
System role: Session update use case orchestration
"""

import logging
from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from cohort_backend.boundary.db.CRUD.cohort_crud import cohort_crud
from cohort_backend.boundary.db.CRUD.cohort_session_crud import cohort_session_crud
from cohort_backend.boundary.db.models.cohort_model import CohortStatus
from cohort_backend.boundary.db.models.cohort_session_model import (
    CohortSessionModel,
    SessionStatus,
)
from cohort_backend.core.date_parsing import SUNDAY
from cohort_backend.core.exceptions import (
    CohortNotFoundError,
    InvalidInputError,
    PartialWriteError,
    SessionNotFoundError,
)
from cohort_backend.core.session_shift import (
    SessionSlot,
    ShiftPlan,
    UpdateMode,
    ensure_no_conflict,
    plan_shift,
)

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = (
    "session_date",
    "topic",
    "instructor",
    "duration_minutes",
    "link",
    "recording_url",
    "status",
)


def _slot(session: CohortSessionModel) -> SessionSlot:
    return SessionSlot(
        session_id=session.id,
        session_number=session.session_number,
        session_date=session.session_date,
    )


def session_to_dict(session: CohortSessionModel) -> dict[str, Any]:
    """Serialize a session row with its cohort summary."""
    cohort = session.cohort
    return {
        "id": session.id,
        "cohort_id": session.cohort_id,
        "session_number": session.session_number,
        "session_date": session.session_date,
        "topic": session.topic,
        "instructor": session.instructor,
        "duration_minutes": session.duration_minutes,
        "link": session.link,
        "recording_url": session.recording_url,
        "status": session.status,
        "created_at": session.created_at,
        "updated_at": session.updated_at,
        "cohort": {
            "id": cohort.id,
            "name": cohort.name,
            "level": cohort.level,
            "status": cohort.status,
        } if cohort is not None else None,
    }


class CohortSessionService:
    """Cohort session service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize session service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def list_sessions(self, cohort_id: UUID | None = None) -> list[dict]:
        """
        List sessions with cohort summaries, ordered by date then number.

        Args:
            cohort_id: Restrict to one cohort when given

        Returns:
            list[dict]: Serialized sessions
        """
        sessions = await cohort_session_crud.get_all_with_cohort(self.db, cohort_id)
        return [session_to_dict(s) for s in sessions]

    async def update_session(
        self,
        session_id: UUID,
        changes: dict[str, Any],
        mode: UpdateMode = UpdateMode.SINGLE,
    ) -> dict:
        """
        Update one session's fields, cascading date changes in shift mode.

        Writes happen in a fixed order inside one transaction: every later
        session is shifted first, then the edited session is written, so no
        intermediate state pairs the new date with an unshifted successor.

        Args:
            session_id: Session UUID
            changes: Validated column values keyed by column name;
                ``session_date`` must already be a ``date``
            mode: SINGLE or SHIFT

        Returns:
            dict: Updated session with cohort summary

        Raises:
            InvalidInputError: Empty change set, unknown field, Sunday date,
                or a cascade that would reach a Sunday
            SessionNotFoundError: Session not found
            ScheduleConflictError: Target date held by a session that will not move
            PartialWriteError: A write in the sequence failed (rolled back)
        """
        unknown = sorted(set(changes) - set(UPDATABLE_FIELDS))
        if unknown:
            raise InvalidInputError(f"Fields cannot be updated: {', '.join(unknown)}")
        if not changes:
            raise InvalidInputError("No valid fields to update")

        existing = await cohort_session_crud.get_by_id(self.db, session_id)
        if existing is None:
            raise SessionNotFoundError(str(session_id))

        plan = await self._check_date_change(existing, changes.get("session_date"), mode)

        try:
            if plan is not None and plan.moves:
                await self._apply_shift(plan)

            try:
                updated = await cohort_session_crud.update_by_id(self.db, session_id, **changes)
            except SQLAlchemyError as e:
                raise PartialWriteError(
                    "Failed to update session",
                    failures=[_failure(existing, str(e))],
                ) from e
            if updated is None:
                raise SessionNotFoundError(str(session_id))

            await self.db.commit()
        except Exception as e:
            logger.error(
                "Failed to update session",
                extra={"error": str(e), "session_id": str(session_id), "update_mode": mode.value},
            )
            await self.db.rollback()
            raise

        logger.info(
            "Session updated",
            extra={
                "session_id": str(session_id),
                "fields": sorted(changes),
                "update_mode": mode.value,
                "shifted_sessions": len(plan.moves) if plan else 0,
            },
        )

        if changes.get("status") == SessionStatus.COMPLETED:
            await self._complete_cohort_if_finished(existing.cohort_id)

        session = await cohort_session_crud.get_with_cohort(self.db, session_id)
        return session_to_dict(session)

    async def update_cohort_link(self, cohort_name: str, link: str) -> dict:
        """
        Set one call link on every session of a cohort found by name.

        Args:
            cohort_name: Exact cohort name
            link: Video call URL

        Returns:
            dict: cohort_id, cohort_name and sessions_updated

        Raises:
            InvalidInputError: Name or link missing
            CohortNotFoundError: No cohort with that name
            PartialWriteError: The bulk write failed (rolled back)
        """
        cohort_name = (cohort_name or "").strip()
        link = (link or "").strip()
        if not cohort_name or not link:
            raise InvalidInputError("cohortName and link are required")

        cohort = await cohort_crud.get_by_name(self.db, cohort_name)
        if cohort is None:
            raise CohortNotFoundError(cohort_name=cohort_name)
        cohort_id = cohort.id

        try:
            updated = await cohort_session_crud.update_link_for_cohort(self.db, cohort_id, link)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                "Failed to update cohort link",
                extra={"error": str(e), "cohort_id": str(cohort_id)},
            )
            raise PartialWriteError(
                "Failed to update sessions",
                failures=[{"cohort_id": str(cohort_id), "reason": str(e)}],
            ) from e

        logger.info(
            "Cohort link updated",
            extra={"cohort_id": str(cohort_id), "sessions_updated": updated},
        )
        return {"cohort_id": cohort_id, "cohort_name": cohort_name, "sessions_updated": updated}

    async def _check_date_change(
        self,
        existing: CohortSessionModel,
        new_date: date | None,
        mode: UpdateMode,
    ) -> ShiftPlan | None:
        """Validate a date change and, in shift mode, plan the cascade."""
        if new_date is None or new_date == existing.session_date:
            return None

        if new_date.weekday() == SUNDAY:
            raise InvalidInputError(
                "Sessions cannot be scheduled on a Sunday",
                field="session_date",
                details={"session_date": new_date.isoformat()},
            )

        same_day = await cohort_session_crud.get_on_date(
            self.db, existing.cohort_id, new_date, exclude_id=existing.id
        )
        ensure_no_conflict(
            [_slot(s) for s in same_day],
            existing.session_number,
            new_date,
            mode,
        )

        if mode is not UpdateMode.SHIFT:
            return None

        successors = await cohort_session_crud.get_after_number(
            self.db, existing.cohort_id, existing.session_number
        )
        earlier = await cohort_session_crud.get_before_number(
            self.db, existing.cohort_id, existing.session_number
        )
        return plan_shift(
            existing.session_date,
            new_date,
            [_slot(s) for s in successors],
            [_slot(s) for s in earlier],
        )

    async def _apply_shift(self, plan: ShiftPlan) -> None:
        """Write successor dates one at a time, ascending; stop at the first failure."""
        for move in plan.moves:
            try:
                updated = await cohort_session_crud.update_date(
                    self.db, move.session_id, move.new_date
                )
            except SQLAlchemyError as e:
                raise PartialWriteError(
                    "Failed to shift subsequent sessions",
                    failures=[_move_failure(move.session_id, move.session_number, str(e))],
                ) from e
            if not updated:
                raise PartialWriteError(
                    "Failed to shift subsequent sessions",
                    failures=[
                        _move_failure(move.session_id, move.session_number, "Session no longer exists")
                    ],
                )

        logger.info(
            "Subsequent sessions shifted",
            extra={"day_offset": plan.day_offset, "shifted_sessions": len(plan.moves)},
        )

    async def _complete_cohort_if_finished(self, cohort_id: UUID) -> None:
        """Mark the cohort completed once every session is completed; never raises."""
        try:
            sessions = await cohort_session_crud.get_by_cohort(self.db, cohort_id)
            if not sessions or any(s.status != SessionStatus.COMPLETED for s in sessions):
                return

            await cohort_crud.update_status(self.db, cohort_id, CohortStatus.COMPLETED)
            await self.db.commit()
            logger.info("Cohort completed", extra={"cohort_id": str(cohort_id)})
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.warning(
                "Failed to update cohort status",
                extra={"error": str(e), "cohort_id": str(cohort_id)},
            )


def _failure(session: CohortSessionModel, reason: str) -> dict[str, Any]:
    return _move_failure(session.id, session.session_number, reason)


def _move_failure(session_id: UUID, session_number: int, reason: str) -> dict[str, Any]:
    return {
        "session_id": str(session_id),
        "session_number": session_number,
        "reason": reason,
    }
