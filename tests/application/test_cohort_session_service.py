"""
Tests for single-session updates: conflict detection, shift cascades and
the cohort completion side effect.
"""

import uuid
from datetime import date

import pytest
from sqlalchemy.exc import OperationalError

from cohort_backend.application.services.cohort_session_service import CohortSessionService
from cohort_backend.boundary.db.CRUD.cohort_crud import cohort_crud
from cohort_backend.boundary.db.CRUD.cohort_session_crud import cohort_session_crud
from cohort_backend.boundary.db.models.cohort_model import CohortStatus
from cohort_backend.boundary.db.models.cohort_session_model import SessionStatus
from cohort_backend.core.exceptions import (
    CohortNotFoundError,
    InvalidInputError,
    PartialWriteError,
    ScheduleConflictError,
    SessionNotFoundError,
)
from cohort_backend.core.session_shift import UpdateMode

# Mon/Wed/Fri, then Mon/Wed
MWF_DATES = [
    date(2026, 1, 19),
    date(2026, 1, 21),
    date(2026, 1, 23),
    date(2026, 1, 26),
    date(2026, 1, 28),
]


@pytest.fixture
def service(test_async_db) -> CohortSessionService:
    return CohortSessionService(test_async_db)


class TestUpdateFields:
    async def test_update_descriptive_fields(self, service, seed_cohort):
        cohort, sessions = await seed_cohort("Cohort 1", MWF_DATES, level="Beginner")

        result = await service.update_session(
            sessions[0].id,
            {"topic": "Intro", "instructor": "Ada", "duration_minutes": 120},
        )

        assert result["topic"] == "Intro"
        assert result["instructor"] == "Ada"
        assert result["duration_minutes"] == 120
        assert result["session_date"] == MWF_DATES[0]
        assert result["cohort"] == {
            "id": cohort.id,
            "name": "Cohort 1",
            "level": "Beginner",
            "status": CohortStatus.UPCOMING,
        }

    async def test_clearing_field(self, service, seed_cohort):
        _, sessions = await seed_cohort("Cohort 1", MWF_DATES)

        result = await service.update_session(sessions[0].id, {"topic": None})

        assert result["topic"] is None

    async def test_empty_changes_rejected(self, service, seed_cohort):
        _, sessions = await seed_cohort("Cohort 1", MWF_DATES)

        with pytest.raises(InvalidInputError, match="No valid fields to update"):
            await service.update_session(sessions[0].id, {})

    async def test_unknown_field_rejected(self, service, seed_cohort):
        _, sessions = await seed_cohort("Cohort 1", MWF_DATES)

        with pytest.raises(InvalidInputError, match="cohort_id"):
            await service.update_session(sessions[0].id, {"cohort_id": uuid.uuid4()})

    async def test_missing_session(self, service):
        with pytest.raises(SessionNotFoundError):
            await service.update_session(uuid.uuid4(), {"topic": "x"})


class TestSingleModeDateChange:
    async def test_move_to_free_date(self, service, seed_cohort, stored_dates):
        cohort, sessions = await seed_cohort("Cohort 1", MWF_DATES)

        result = await service.update_session(sessions[2].id, {"session_date": date(2026, 1, 24)})

        assert result["session_date"] == date(2026, 1, 24)
        stored = await stored_dates(cohort.id)
        assert stored[3] == date(2026, 1, 24)
        assert stored[4] == MWF_DATES[3]

    async def test_conflict_with_later_session(self, service, seed_cohort, stored_dates):
        cohort, sessions = await seed_cohort("Cohort 1", MWF_DATES)

        with pytest.raises(ScheduleConflictError, match="already used by session 4") as exc_info:
            await service.update_session(sessions[2].id, {"session_date": date(2026, 1, 26)})

        assert exc_info.value.conflicting_session_numbers == [4]
        assert await stored_dates(cohort.id) == dict(enumerate(MWF_DATES, start=1))

    async def test_conflict_with_earlier_session(self, service, seed_cohort):
        _, sessions = await seed_cohort("Cohort 1", MWF_DATES)

        with pytest.raises(ScheduleConflictError, match="session 1"):
            await service.update_session(sessions[2].id, {"session_date": date(2026, 1, 19)})

    async def test_same_date_is_not_a_conflict(self, service, seed_cohort):
        _, sessions = await seed_cohort("Cohort 1", MWF_DATES)

        result = await service.update_session(
            sessions[2].id, {"session_date": MWF_DATES[2], "topic": "Same day"}
        )

        assert result["topic"] == "Same day"

    async def test_other_cohort_dates_do_not_conflict(self, service, seed_cohort):
        _, sessions = await seed_cohort("Cohort 1", MWF_DATES)
        await seed_cohort("Cohort 2", [date(2026, 1, 30)])

        result = await service.update_session(sessions[4].id, {"session_date": date(2026, 1, 30)})

        assert result["session_date"] == date(2026, 1, 30)

    async def test_sunday_rejected(self, service, seed_cohort):
        _, sessions = await seed_cohort("Cohort 1", MWF_DATES)

        with pytest.raises(InvalidInputError, match="Sunday"):
            await service.update_session(sessions[2].id, {"session_date": date(2026, 1, 25)})


class TestShiftModeDateChange:
    async def test_shift_moves_every_later_session(self, service, seed_cohort, stored_dates):
        cohort, sessions = await seed_cohort("Cohort 1", MWF_DATES)

        # Session 3: Fri 01-23 -> Mon 01-26 (+3 days), onto session 4's old date
        result = await service.update_session(
            sessions[2].id, {"session_date": date(2026, 1, 26)}, UpdateMode.SHIFT
        )

        assert result["session_date"] == date(2026, 1, 26)
        assert await stored_dates(cohort.id) == {
            1: date(2026, 1, 19),
            2: date(2026, 1, 21),
            3: date(2026, 1, 26),
            4: date(2026, 1, 29),
            5: date(2026, 1, 31),
        }

    async def test_shift_backwards(self, service, seed_cohort, stored_dates):
        cohort, sessions = await seed_cohort("Cohort 1", MWF_DATES)

        await service.update_session(sessions[3].id, {"session_date": date(2026, 1, 24)}, UpdateMode.SHIFT)

        stored = await stored_dates(cohort.id)
        assert stored[4] == date(2026, 1, 24)
        assert stored[5] == date(2026, 1, 26)
        assert stored[3] == MWF_DATES[2]

    async def test_shift_blocked_by_earlier_session(self, service, seed_cohort, stored_dates):
        cohort, sessions = await seed_cohort("Cohort 1", MWF_DATES)

        with pytest.raises(ScheduleConflictError, match="session 2"):
            await service.update_session(sessions[2].id, {"session_date": date(2026, 1, 21)}, UpdateMode.SHIFT)

        assert await stored_dates(cohort.id) == dict(enumerate(MWF_DATES, start=1))

    async def test_shift_onto_sunday_rejected_before_writing(self, service, seed_cohort, stored_dates):
        cohort, sessions = await seed_cohort("Cohort 1", MWF_DATES)

        # +2 days would move session 3 (Fri 01-23) onto Sunday 01-25
        with pytest.raises(InvalidInputError, match="onto a Sunday"):
            await service.update_session(sessions[1].id, {"session_date": date(2026, 1, 23)}, UpdateMode.SHIFT)

        assert await stored_dates(cohort.id) == dict(enumerate(MWF_DATES, start=1))

    async def test_failed_successor_write_rolls_back(
        self, service, seed_cohort, stored_dates, monkeypatch
    ):
        cohort, sessions = await seed_cohort("Cohort 1", MWF_DATES)
        # A rollback expires loaded rows, so keep plain ids for the assertions
        cohort_id = cohort.id
        edited_id = sessions[2].id
        failing_id = sessions[4].id
        real_update = cohort_session_crud.update_date

        async def flaky_update(db, id, session_date):
            if id == failing_id:
                raise OperationalError("UPDATE cohort_sessions", {}, Exception("connection reset"))
            return await real_update(db, id, session_date)

        monkeypatch.setattr(cohort_session_crud, "update_date", flaky_update)

        with pytest.raises(PartialWriteError) as exc_info:
            await service.update_session(edited_id, {"session_date": date(2026, 1, 26)}, UpdateMode.SHIFT)

        assert exc_info.value.failures[0]["session_number"] == 5
        assert await stored_dates(cohort_id) == dict(enumerate(MWF_DATES, start=1))

    async def test_shift_past_last_supported_date_writes_nothing(self, service, seed_cohort, stored_dates):
        cohort, sessions = await seed_cohort("Cohort 1", MWF_DATES)

        with pytest.raises(InvalidInputError, match="outside the supported date range"):
            await service.update_session(sessions[2].id, {"session_date": date(9999, 12, 29)}, UpdateMode.SHIFT)

        assert await stored_dates(cohort.id) == dict(enumerate(MWF_DATES, start=1))

    async def test_successors_written_before_edited_session(self, service, seed_cohort, monkeypatch):
        _, sessions = await seed_cohort("Cohort 1", MWF_DATES)
        calls: list[str] = []
        real_update_date = cohort_session_crud.update_date
        real_update_by_id = cohort_session_crud.update_by_id

        async def track_update_date(db, id, session_date):
            calls.append(f"shift:{session_date.isoformat()}")
            return await real_update_date(db, id, session_date)

        async def track_update_by_id(db, id, **changes):
            calls.append("edited")
            return await real_update_by_id(db, id, **changes)

        monkeypatch.setattr(cohort_session_crud, "update_date", track_update_date)
        monkeypatch.setattr(cohort_session_crud, "update_by_id", track_update_by_id)

        await service.update_session(sessions[2].id, {"session_date": date(2026, 1, 26)}, UpdateMode.SHIFT)

        assert calls == ["shift:2026-01-29", "shift:2026-01-31", "edited"]


class TestCompletionSideEffect:
    async def test_cohort_completed_when_last_session_completes(self, service, seed_cohort, test_async_db):
        cohort, sessions = await seed_cohort("Cohort 1", MWF_DATES[:2], status=CohortStatus.ACTIVE)

        await service.update_session(sessions[0].id, {"status": SessionStatus.COMPLETED})
        assert (await cohort_crud.get_by_id(test_async_db, cohort.id)).status == CohortStatus.ACTIVE

        result = await service.update_session(sessions[1].id, {"status": SessionStatus.COMPLETED})

        assert result["status"] == SessionStatus.COMPLETED
        assert result["cohort"]["status"] == CohortStatus.COMPLETED

    async def test_completion_failure_is_not_surfaced(self, service, seed_cohort, monkeypatch):
        _, sessions = await seed_cohort("Cohort 1", MWF_DATES[:1])

        async def broken_update_status(db, id, status):
            raise OperationalError("UPDATE cohorts", {}, Exception("locked"))

        monkeypatch.setattr(cohort_crud, "update_status", broken_update_status)

        result = await service.update_session(sessions[0].id, {"status": SessionStatus.COMPLETED})

        assert result["status"] == SessionStatus.COMPLETED
        assert result["cohort"]["status"] == CohortStatus.UPCOMING


class TestListSessions:
    async def test_list_orders_by_date_then_number(self, service, seed_cohort):
        cohort_a, _ = await seed_cohort("Cohort A", [date(2026, 1, 21), date(2026, 1, 19)])
        await seed_cohort("Cohort B", [date(2026, 1, 20)])

        everything = await service.list_sessions()
        only_a = await service.list_sessions(cohort_a.id)

        assert [s["session_date"] for s in everything] == [
            date(2026, 1, 19),
            date(2026, 1, 20),
            date(2026, 1, 21),
        ]
        assert [s["session_number"] for s in only_a] == [2, 1]
        assert all(s["cohort"]["name"] == "Cohort A" for s in only_a)


class TestUpdateCohortLink:
    async def test_link_set_on_every_session(self, service, seed_cohort, stored_links):
        cohort, _ = await seed_cohort("Cohort 1", MWF_DATES)
        await seed_cohort("Cohort 2", MWF_DATES[:2])

        outcome = await service.update_cohort_link(" Cohort 1 ", " https://meet.example.com/c1 ")

        assert outcome == {"cohort_id": cohort.id, "cohort_name": "Cohort 1", "sessions_updated": 5}
        assert set((await stored_links(cohort.id)).values()) == {"https://meet.example.com/c1"}

    async def test_unknown_cohort(self, service):
        with pytest.raises(CohortNotFoundError, match='Cohort not found: "Nope"'):
            await service.update_cohort_link("Nope", "https://meet.example.com/x")

    @pytest.mark.parametrize(("name", "link"), [("", "https://x"), ("Cohort 1", "  "), (None, None)])
    async def test_name_and_link_required(self, service, name, link):
        with pytest.raises(InvalidInputError, match="cohortName and link are required"):
            await service.update_cohort_link(name, link)

    async def test_failed_write_rolls_back(self, service, seed_cohort, stored_links, monkeypatch):
        cohort, _ = await seed_cohort("Cohort 1", MWF_DATES[:2])
        # A rollback expires loaded rows, so keep plain ids for the assertions
        cohort_id = cohort.id
        real_update = cohort_session_crud.update_link_for_cohort

        async def update_then_fail(db, cohort_id, link):
            await real_update(db, cohort_id, link)
            raise OperationalError("UPDATE cohort_sessions", {}, Exception("connection reset"))

        monkeypatch.setattr(cohort_session_crud, "update_link_for_cohort", update_then_fail)

        with pytest.raises(PartialWriteError, match="Failed to update sessions"):
            await service.update_cohort_link("Cohort 1", "https://meet.example.com/c1")

        assert await stored_links(cohort_id) == {1: None, 2: None}
