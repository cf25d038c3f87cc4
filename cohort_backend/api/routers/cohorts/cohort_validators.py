"""
Cohort request validation utilities.

Turns the loosely typed rearrangement body into service arguments,
raising InvalidInputError with the offending field for anything malformed.

Dependencies: cohort_backend.core, cohort_backend.models.cohort
System role: Rearrangement request validation
"""

from dataclasses import dataclass
from datetime import date
from typing import Any
from uuid import UUID

from cohort_backend.core.date_parsing import parse_calendar_date
from cohort_backend.core.exceptions import CohortNotFoundError, InvalidInputError
from cohort_backend.models.cohort import RearrangeSessionsRequest


@dataclass
class RearrangeArguments:
    """Validated arguments for SessionRearrangementService.rearrange."""

    start_date: date
    cohort_id: UUID | None = None
    cohort_name: str | None = None
    fixed_dates: dict[int, date] | None = None
    dry_run: bool = False


def parse_cohort_id(raw: str) -> UUID:
    """
    Parse a cohort id.

    A string that is not a UUID cannot name any cohort, so it is reported
    as not found rather than as bad input.
    """
    try:
        return UUID(str(raw).strip())
    except ValueError as e:
        raise CohortNotFoundError(cohort_id=str(raw)) from e


def parse_fixed_dates(raw: dict[str, Any]) -> dict[int, date]:
    """
    Parse ``{"4": "2026-01-26", ...}`` into session number keyed dates.

    Raises:
        InvalidInputError: Non-positive or non-numeric key, or unparseable date
    """
    parsed: dict[int, date] = {}
    for key, value in raw.items():
        try:
            number = int(str(key).strip())
        except ValueError as e:
            raise InvalidInputError(
                f"fixedDates keys must be session numbers, got {key!r}",
                field="fixedDates",
            ) from e
        if number < 1:
            raise InvalidInputError(
                f"fixedDates keys must be positive session numbers, got {number}",
                field="fixedDates",
            )
        parsed[number] = parse_calendar_date(value, field=f"fixedDates[{number}]")
    return parsed


def validate_rearrange_request(request: RearrangeSessionsRequest) -> RearrangeArguments:
    """
    Validate a rearrangement request with business rules.

    Checks run in a fixed order: start date present, a cohort identifier
    present, start date parseable, then the optional fields.

    Raises:
        InvalidInputError: Missing or malformed field
        CohortNotFoundError: cohortId is not a UUID
    """
    if request.start_date is None or (isinstance(request.start_date, str) and not request.start_date.strip()):
        raise InvalidInputError("startDate is required", field="startDate")

    cohort_id_raw = (request.cohort_id or "").strip()
    cohort_name = (request.cohort_name or "").strip()
    if not cohort_id_raw and not cohort_name:
        raise InvalidInputError("Either cohortId or cohortName is required", field="cohortId")

    start_date = parse_calendar_date(request.start_date, field="startDate")

    fixed_dates = None
    if request.fixed_dates is not None:
        fixed_dates = parse_fixed_dates(request.fixed_dates)

    return RearrangeArguments(
        start_date=start_date,
        cohort_id=parse_cohort_id(cohort_id_raw) if cohort_id_raw else None,
        cohort_name=cohort_name or None,
        fixed_dates=fixed_dates,
        dry_run=request.dry_run,
    )
