"""
Conflict rules and cascade planning for single-session date changes.

Decides which same-date sessions block a move, and computes the equal
day offset applied to every later session in shift mode.

Dependencies: None (pure domain layer)
System role: Date collision policy for session updates
"""

import enum
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any

from cohort_backend.core.date_parsing import SUNDAY
from cohort_backend.core.exceptions import InvalidInputError, ScheduleConflictError


class UpdateMode(str, enum.Enum):
    """
    How a date change on one session affects the rest of its cohort.

    SINGLE: Only the edited session moves
    SHIFT: Every later session moves by the same number of days
    """

    SINGLE = "single"
    SHIFT = "shift"


@dataclass(frozen=True)
class SessionSlot:
    """Snapshot of a persisted session's position and date."""

    session_id: Any
    session_number: int
    session_date: date


@dataclass(frozen=True)
class SessionMove:
    """Planned date change for one successor session."""

    session_id: Any
    session_number: int
    old_date: date
    new_date: date


@dataclass
class ShiftPlan:
    """Cascade computed for a shift-mode update."""

    day_offset: int
    moves: list[SessionMove]


def blocking_conflicts(
    same_date_sessions: Iterable[SessionSlot],
    edited_number: int,
    mode: UpdateMode,
) -> list[SessionSlot]:
    """
    Filter sessions already on the target date down to the ones that block.

    In single mode every one of them blocks. In shift mode only sessions
    numbered at or below the edited one block; later ones move out of the
    way in the same operation.
    """
    if mode is UpdateMode.SINGLE:
        return list(same_date_sessions)
    return [slot for slot in same_date_sessions if slot.session_number <= edited_number]


def ensure_no_conflict(
    same_date_sessions: Iterable[SessionSlot],
    edited_number: int,
    target_date: date,
    mode: UpdateMode,
) -> None:
    """
    Raise when the target date is held by a session that will not move.

    Raises:
        ScheduleConflictError: Naming the colliding session number(s)
    """
    blocking = sorted(
        blocking_conflicts(same_date_sessions, edited_number, mode),
        key=lambda slot: slot.session_number,
    )
    if not blocking:
        return

    numbers = [slot.session_number for slot in blocking]
    raise ScheduleConflictError(
        f"Date {target_date.isoformat()} is already used by session {numbers[0]}",
        conflicting_session_numbers=numbers,
        details={"date": target_date.isoformat()},
    )


def plan_shift(
    old_date: date,
    new_date: date,
    successors: Sequence[SessionSlot],
    unmoved: Sequence[SessionSlot],
) -> ShiftPlan:
    """
    Compute the moves for every later session.

    Args:
        old_date: Edited session's stored date
        new_date: Edited session's requested date
        successors: Sessions numbered after the edited one
        unmoved: Sessions numbered before the edited one

    Returns:
        ShiftPlan: Offset in days and the moves, ascending by session number

    Raises:
        InvalidInputError: If a shifted session would land on a Sunday, or outside
            the supported date range
        ScheduleConflictError: If a shifted session would land on the date of
            a session that does not move
    """
    offset = (new_date - old_date).days
    if offset == 0:
        return ShiftPlan(day_offset=0, moves=[])

    delta = timedelta(days=offset)
    try:
        moves = [
            SessionMove(
                session_id=slot.session_id,
                session_number=slot.session_number,
                old_date=slot.session_date,
                new_date=slot.session_date + delta,
            )
            for slot in sorted(successors, key=lambda slot: slot.session_number)
        ]
    except OverflowError as e:
        raise InvalidInputError(
            f"Shifting by {offset} day(s) would move a later session outside the supported date range",
            field="session_date",
            details={"day_offset": offset},
        ) from e

    on_sunday = [move.session_number for move in moves if move.new_date.weekday() == SUNDAY]
    if on_sunday:
        raise InvalidInputError(
            f"Shifting by {offset} day(s) would move session {on_sunday[0]} onto a Sunday",
            field="session_date",
            details={"day_offset": offset, "session_numbers": on_sunday},
        )

    taken = {slot.session_date: slot.session_number for slot in unmoved}
    clashes = sorted({taken[move.new_date] for move in moves if move.new_date in taken})
    if clashes:
        raise ScheduleConflictError(
            f"Shifting by {offset} day(s) would collide with session {clashes[0]}",
            conflicting_session_numbers=clashes,
            details={"day_offset": offset},
        )

    return ShiftPlan(day_offset=offset, moves=moves)
