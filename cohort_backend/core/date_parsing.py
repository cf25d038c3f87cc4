"""
Calendar date parsing helpers.

Lenient parsing of caller-supplied dates into plain calendar dates, and
weekday naming for schedule output.

Dependencies: python-dateutil
System role: Date normalisation shared by the scheduling engines
"""

import re
from datetime import date, datetime

from dateutil import parser as date_parser

from cohort_backend.core.exceptions import InvalidInputError

MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY, SUNDAY = range(7)

WEEKDAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

# Two unrelated defaults: a string that leaves any date component unspecified
# resolves differently against each and is rejected as incomplete.
_PROBE_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))

# ISO year or year-month without a day
_PARTIAL_ISO = re.compile(r"^\d{4}(-\d{2})?$")


def weekday_from_name(name: str) -> int:
    """
    Map an English weekday name (full or three-letter) to ``date.weekday()``.

    Raises:
        ValueError: If the name is not a weekday
    """
    key = name.strip().lower()
    for index, weekday in enumerate(WEEKDAY_NAMES):
        if key in (weekday.lower(), weekday[:3].lower()):
            return index
    raise ValueError(f"Unknown weekday: {name!r}")


def weekday_name(value: date) -> str:
    """Return the English weekday name of a date."""
    return WEEKDAY_NAMES[value.weekday()]


def parse_calendar_date(value: object, field: str = "date") -> date:
    """
    Parse a caller-supplied value into a calendar date.

    Accepts ``date``/``datetime`` objects, ISO-8601 strings (with or without a
    time component) and common textual forms such as ``"Jan 19 2026"``. Any
    time of day or offset is discarded; the calendar date as written is kept.

    Args:
        value: Raw value from a request or configuration
        field: Field name reported on failure

    Returns:
        date: The calendar date

    Raises:
        InvalidInputError: If the value is empty, unparseable or incomplete
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidInputError(f"{field} is required", field=field)
    if not isinstance(value, str):
        raise InvalidInputError("Invalid date format. Use YYYY-MM-DD", field=field)

    text = value.strip()
    if _PARTIAL_ISO.match(text):
        raise InvalidInputError(
            "Ambiguous date: day, month and year are all required",
            field=field,
            details={"value": text},
        )

    try:
        return date_parser.isoparse(text).date()
    except (ValueError, OverflowError):
        pass

    try:
        first, second = (
            date_parser.parse(text, default=default).date() for default in _PROBE_DEFAULTS
        )
    except (ValueError, OverflowError) as e:
        raise InvalidInputError(
            "Invalid date format. Use YYYY-MM-DD",
            field=field,
            details={"value": text, "reason": str(e)},
        ) from e

    if first != second:
        raise InvalidInputError(
            "Ambiguous date: day, month and year are all required",
            field=field,
            details={"value": text},
        )
    return first
