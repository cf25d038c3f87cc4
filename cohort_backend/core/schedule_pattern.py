"""
Weekly session pattern engine.

Assigns calendar dates to an ordered run of cohort sessions by rotating
through a fixed set of weekly teaching days (Monday/Wednesday/Friday by
default), never landing on Sunday, and honouring pinned dates for specific
session numbers.

Dependencies: None (pure domain layer)
System role: Date computation for bulk session rearrangement
"""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import date, timedelta

from cohort_backend.core.date_parsing import (
    FRIDAY,
    MONDAY,
    SUNDAY,
    WEDNESDAY,
    weekday_name,
)
from cohort_backend.core.exceptions import InvalidInputError

DEFAULT_WORKING_DAYS = (MONDAY, WEDNESDAY, FRIDAY)

ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class ScheduledSession:
    """One computed assignment of a date to a session number."""

    session_number: int
    session_date: date
    fixed: bool = False

    @property
    def day(self) -> str:
        return weekday_name(self.session_date)


class WeeklyPattern:
    """
    Rotating weekly slot pattern.

    A slot index points into ``working_days``; advancing moves to the next
    index (wrapping into the following week) and to the first calendar date
    strictly after the current one that falls on that weekday.

    Attributes:
        working_days: Sorted ``date.weekday()`` numbers of the teaching days
    """

    def __init__(self, working_days: Iterable[int] = DEFAULT_WORKING_DAYS) -> None:
        """
        Initialize pattern with its teaching days.

        Args:
            working_days: ``date.weekday()`` numbers (Monday = 0)

        Raises:
            ValueError: If no days are given, a day is out of range, or Sunday is included
        """
        days = tuple(sorted(set(working_days)))
        if not days:
            raise ValueError("A weekly pattern needs at least one working day")
        if any(day < MONDAY or day > SUNDAY for day in days):
            raise ValueError(f"Working days must be weekday numbers 0-6, got {days}")
        if SUNDAY in days:
            raise ValueError("Sunday can never be a working day")
        self.working_days = days

    def normalize_start(self, start: date) -> tuple[date, int]:
        """
        Move a start date forward onto the first working day.

        Sunday goes straight to Monday; any other non-working day walks
        forward one day at a time, stepping over Sunday if the walk reaches it.

        Returns:
            tuple: (first working date, its slot index)
        """
        current = start
        if current.weekday() == SUNDAY:
            current += ONE_DAY
        while current.weekday() not in self.working_days:
            current += ONE_DAY
            if current.weekday() == SUNDAY:
                current += ONE_DAY
        return current, self.working_days.index(current.weekday())

    def slot_for(self, value: date) -> int:
        """
        Slot index a date occupies in the weekly cycle.

        For a non-working day this is the most recent working day on or
        before it, so that advancing lands on the next working day after it.
        """
        weekday = value.weekday()
        earlier = [index for index, day in enumerate(self.working_days) if day <= weekday]
        return earlier[-1] if earlier else len(self.working_days) - 1

    def advance(self, current: date, slot: int) -> tuple[date, int]:
        """
        Compute the next slot strictly after ``current``.

        Args:
            current: Date occupying ``slot``
            slot: Current slot index

        Returns:
            tuple: (next date, next slot index)
        """
        next_slot = (slot + 1) % len(self.working_days)
        target = self.working_days[next_slot]
        days_ahead = (target - current.weekday()) % 7 or 7
        candidate = current + timedelta(days=days_ahead)
        if candidate.weekday() == SUNDAY:
            candidate += ONE_DAY
            next_slot = self.slot_for(candidate)
        return candidate, next_slot

    def build_schedule(
        self,
        session_numbers: Iterable[int],
        start_date: date,
        fixed_dates: Mapping[int, date] | None = None,
    ) -> list[ScheduledSession]:
        """
        Assign a date to every session number, in ascending order.

        Pattern dates come from the rolling slot; a session number present in
        ``fixed_dates`` takes that exact date instead and the pattern resumes
        from the slot after it.

        Args:
            session_numbers: Session numbers of the cohort
            start_date: Requested date for the first session
            fixed_dates: Pinned dates by session number

        Returns:
            list[ScheduledSession]: One entry per session, ordered by number

        Raises:
            InvalidInputError: If a pinned date falls on Sunday, does not come
                strictly after the date assigned to the preceding session, or
                the run steps past the last representable calendar date
        """
        fixed_dates = fixed_dates or {}
        schedule: list[ScheduledSession] = []

        try:
            current, slot = self.normalize_start(start_date)
            # The next pattern date is stepped to only when a session needs it
            step = False
            for number in sorted(session_numbers):
                pinned = fixed_dates.get(number)
                if pinned is None:
                    if step:
                        current, slot = self.advance(current, slot)
                    schedule.append(ScheduledSession(number, current))
                else:
                    _check_pinned_date(number, pinned, schedule)
                    schedule.append(ScheduledSession(number, pinned, fixed=True))
                    current, slot = pinned, self.slot_for(pinned)
                step = True
        except OverflowError as e:
            raise InvalidInputError(
                f"Schedule starting {start_date.isoformat()} runs past the last supported date",
                field="startDate",
                details={"start_date": start_date.isoformat(), "last_supported_date": date.max.isoformat()},
            ) from e

        return schedule


def _check_pinned_date(
    number: int,
    pinned: date,
    schedule: Sequence[ScheduledSession],
) -> None:
    if pinned.weekday() == SUNDAY:
        raise InvalidInputError(
            f"Fixed date for session {number} falls on a Sunday",
            field="fixedDates",
            details={"session_number": number, "date": pinned.isoformat()},
        )
    if schedule and pinned <= schedule[-1].session_date:
        previous = schedule[-1]
        raise InvalidInputError(
            f"Fixed date for session {number} must come after session "
            f"{previous.session_number} ({previous.session_date.isoformat()})",
            field="fixedDates",
            details={
                "session_number": number,
                "date": pinned.isoformat(),
                "previous_session_number": previous.session_number,
                "previous_date": previous.session_date.isoformat(),
            },
        )
