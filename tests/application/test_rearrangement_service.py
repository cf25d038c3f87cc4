"""
Tests for the bulk session rearrangement service.

Runs against an in-memory SQLite database seeded with a cohort whose
sessions sit on arbitrary dates.
"""

import uuid
from datetime import date, timedelta
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from cohort_backend.application.services.rearrangement_service import SessionRearrangementService
from cohort_backend.boundary.db.CRUD.cohort_session_crud import cohort_session_crud
from cohort_backend.core.date_parsing import TUESDAY, THURSDAY
from cohort_backend.core.exceptions import (
    CohortNotFoundError,
    InvalidInputError,
    NoSessionsError,
    PartialWriteError,
)
from cohort_backend.core.schedule_pattern import ScheduledSession, WeeklyPattern

WORKED_EXAMPLE_FIXED = {4: date(2026, 1, 26), 6: date(2026, 1, 30), 8: date(2026, 2, 4)}

WORKED_EXAMPLE_DATES = [
    date(2026, 1, 19),
    date(2026, 1, 21),
    date(2026, 1, 23),
    date(2026, 1, 26),
    date(2026, 1, 28),
    date(2026, 1, 30),
    date(2026, 2, 2),
    date(2026, 2, 4),
    date(2026, 2, 6),
    date(2026, 2, 9),
]


def daily_dates(count: int, start: date = date(2025, 11, 3)) -> list[date]:
    return [start + timedelta(days=offset) for offset in range(count)]


@pytest.fixture
def service(test_async_db) -> SessionRearrangementService:
    return SessionRearrangementService(test_async_db)


class TestResolveCohort:
    async def test_resolve_by_id_takes_precedence(self, service, seed_cohort):
        cohort, _ = await seed_cohort("Cohort 1", daily_dates(2))
        await seed_cohort("Cohort 2", daily_dates(2))

        resolved = await service.resolve_cohort(cohort_id=cohort.id, cohort_name="Cohort 2")

        assert resolved.id == cohort.id

    async def test_resolve_by_name(self, service, seed_cohort):
        cohort, _ = await seed_cohort("Cohort 1", daily_dates(2))

        resolved = await service.resolve_cohort(cohort_name="Cohort 1")

        assert resolved.id == cohort.id

    async def test_missing_identifier(self, service):
        with pytest.raises(InvalidInputError, match="Either cohortId or cohortName is required"):
            await service.resolve_cohort()

    async def test_unknown_name(self, service):
        with pytest.raises(CohortNotFoundError, match='Cohort not found: "Nope"'):
            await service.resolve_cohort(cohort_name="Nope")

    async def test_unknown_id(self, service):
        with pytest.raises(CohortNotFoundError):
            await service.resolve_cohort(cohort_id=uuid.uuid4())


class TestRearrange:
    async def test_worked_example_is_persisted(self, service, seed_cohort, stored_dates):
        cohort, _ = await seed_cohort("Cohort 1", daily_dates(10))

        result = await service.rearrange(
            start_date=date(2026, 1, 19),
            cohort_name="Cohort 1",
            fixed_dates=WORKED_EXAMPLE_FIXED,
        )

        assert result.persisted is True
        assert [entry.session_date for entry in result.schedule] == WORKED_EXAMPLE_DATES
        assert result.end_date == date(2026, 2, 9)
        assert await stored_dates(cohort.id) == dict(enumerate(WORKED_EXAMPLE_DATES, start=1))

    async def test_invariants_hold_after_rearrange(self, service, seed_cohort, stored_dates):
        cohort, _ = await seed_cohort("Cohort 1", daily_dates(25))

        await service.rearrange(start_date=date(2026, 3, 7), cohort_id=cohort.id)

        stored = await stored_dates(cohort.id)
        ordered = [stored[number] for number in sorted(stored)]
        assert len(set(ordered)) == len(ordered)
        assert all(d.weekday() in (0, 2, 4) for d in ordered)
        assert all(earlier < later for earlier, later in zip(ordered, ordered[1:]))
        # Saturday start moves to the following Monday
        assert ordered[0] == date(2026, 3, 9)

    async def test_rerun_is_idempotent(self, service, seed_cohort, stored_dates):
        cohort, _ = await seed_cohort("Cohort 1", daily_dates(10))

        first = await service.rearrange(date(2026, 1, 19), cohort_id=cohort.id, fixed_dates=WORKED_EXAMPLE_FIXED)
        after_first = await stored_dates(cohort.id)
        second = await service.rearrange(date(2026, 1, 19), cohort_id=cohort.id, fixed_dates=WORKED_EXAMPLE_FIXED)

        assert first.schedule == second.schedule
        assert await stored_dates(cohort.id) == after_first

    async def test_dry_run_writes_nothing(self, service, seed_cohort, stored_dates):
        original = daily_dates(4)
        cohort, _ = await seed_cohort("Cohort 1", original)

        result = await service.rearrange(date(2026, 1, 19), cohort_id=cohort.id, dry_run=True)

        assert result.persisted is False
        assert result.end_date == date(2026, 1, 26)
        assert await stored_dates(cohort.id) == dict(enumerate(original, start=1))

    async def test_configured_fixed_dates_apply_when_none_given(self, test_async_db, seed_cohort):
        cohort, _ = await seed_cohort("Cohort 1", daily_dates(4))
        service = SessionRearrangementService(test_async_db, default_fixed_dates={2: date(2026, 1, 22)})

        defaulted = await service.rearrange(date(2026, 1, 19), cohort_id=cohort.id, dry_run=True)
        overridden = await service.rearrange(date(2026, 1, 19), cohort_id=cohort.id, fixed_dates={}, dry_run=True)

        assert defaulted.schedule[1].session_date == date(2026, 1, 22)
        assert overridden.schedule[1].session_date == date(2026, 1, 21)

    async def test_custom_pattern(self, test_async_db, seed_cohort):
        cohort, _ = await seed_cohort("Cohort 1", daily_dates(3))
        service = SessionRearrangementService(test_async_db, pattern=WeeklyPattern((TUESDAY, THURSDAY)))

        result = await service.rearrange(date(2026, 1, 19), cohort_id=cohort.id, dry_run=True)

        assert [entry.day for entry in result.schedule] == ["Tuesday", "Thursday", "Tuesday"]

    async def test_no_sessions(self, service, seed_cohort):
        cohort, _ = await seed_cohort("Empty", [])

        with pytest.raises(NoSessionsError, match="No sessions found for this cohort"):
            await service.rearrange(date(2026, 1, 19), cohort_id=cohort.id)

    async def test_invalid_fixed_dates_write_nothing(self, service, seed_cohort, stored_dates):
        original = daily_dates(5)
        cohort, _ = await seed_cohort("Cohort 1", original)

        with pytest.raises(InvalidInputError):
            await service.rearrange(date(2026, 1, 19), cohort_id=cohort.id, fixed_dates={3: date(2026, 1, 19)})

        assert await stored_dates(cohort.id) == dict(enumerate(original, start=1))


class TestRearrangeWriteFailures:
    async def test_database_error_rolls_back_everything(
        self, service, seed_cohort, stored_dates, monkeypatch
    ):
        original = daily_dates(4)
        cohort, sessions = await seed_cohort("Cohort 1", original)
        # A rollback expires loaded rows, so keep plain ids for the assertions
        cohort_id = cohort.id
        failing_id = sessions[2].id
        real_update = cohort_session_crud.update_date

        async def flaky_update(db, id, session_date):
            if id == failing_id:
                raise OperationalError("UPDATE cohort_sessions", {}, Exception("disk I/O error"))
            return await real_update(db, id, session_date)

        monkeypatch.setattr(cohort_session_crud, "update_date", flaky_update)

        with pytest.raises(PartialWriteError) as exc_info:
            await service.rearrange(date(2026, 1, 19), cohort_id=cohort_id)

        assert exc_info.value.applied == 0
        assert [f["session_number"] for f in exc_info.value.failures] == [3]
        assert await stored_dates(cohort_id) == dict(enumerate(original, start=1))

    async def test_vanished_rows_are_all_reported(self, service, seed_cohort, stored_dates, monkeypatch):
        original = daily_dates(4)
        cohort, sessions = await seed_cohort("Cohort 1", original)
        cohort_id = cohort.id
        missing = {sessions[1].id, sessions[3].id}
        real_update = cohort_session_crud.update_date

        async def partial_update(db, id, session_date):
            if id in missing:
                return False
            return await real_update(db, id, session_date)

        monkeypatch.setattr(cohort_session_crud, "update_date", partial_update)

        with pytest.raises(PartialWriteError, match="Failed to update 2 session"):
            await service.rearrange(date(2026, 1, 19), cohort_id=cohort_id)

        assert await stored_dates(cohort_id) == dict(enumerate(original, start=1))

    async def test_failure_rolls_back_without_commit(self, monkeypatch):
        db = AsyncMock()
        service = SessionRearrangementService(db)
        row = SimpleNamespace(id=uuid.uuid4(), session_number=1)
        monkeypatch.setattr(cohort_session_crud, "update_date", AsyncMock(return_value=False))

        with pytest.raises(PartialWriteError):
            await service._persist([row], [ScheduledSession(1, date(2026, 1, 19))])

        db.rollback.assert_awaited_once()
        db.commit.assert_not_awaited()
