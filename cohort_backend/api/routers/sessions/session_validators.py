"""
Session request validation utilities.

Builds the column change set for a session update from the loosely typed
request body. Only fields present in the body are considered.

Dependencies: cohort_backend.core, cohort_backend.boundary.db.models, cohort_backend.models.session
System role: Session update request validation
"""

import math
from typing import Any
from uuid import UUID

from cohort_backend.boundary.db.models.cohort_session_model import SessionStatus
from cohort_backend.core.date_parsing import parse_calendar_date
from cohort_backend.core.exceptions import InvalidInputError, SessionNotFoundError
from cohort_backend.core.session_shift import UpdateMode
from cohort_backend.models.session import UpdateCohortLinkRequest, UpdateSessionRequest

CLEARABLE_TEXT_FIELDS = ("topic", "instructor", "link", "recording_url")


def parse_session_id(raw: str) -> UUID:
    """Parse a session id; anything that is not a UUID cannot exist."""
    try:
        return UUID(raw.strip())
    except ValueError as e:
        raise SessionNotFoundError(raw) from e


def parse_duration(value: Any) -> int:
    """
    Parse duration_minutes into whole minutes.

    Any finite non-negative number is accepted, as a JSON number or a numeric
    string; a fractional part is dropped (``30.5`` -> 30).

    Raises:
        InvalidInputError: Not a number, not finite, or negative
    """
    number = None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            number = None

    if number is None or not math.isfinite(number) or number < 0:
        raise InvalidInputError(
            "duration_minutes must be a non-negative number",
            field="duration_minutes",
        )
    return int(number)


def parse_status(value: Any) -> SessionStatus:
    """
    Parse a session status value.

    Raises:
        InvalidInputError: Not one of the known statuses
    """
    try:
        return SessionStatus(value)
    except ValueError as e:
        valid = ", ".join(member.value for member in SessionStatus)
        raise InvalidInputError(f"status must be one of: {valid}", field="status") from e


def parse_update_mode(value: Any) -> UpdateMode:
    """Parse update_mode; absent or null means single."""
    if value is None:
        return UpdateMode.SINGLE
    try:
        return UpdateMode(value)
    except ValueError as e:
        valid = ", ".join(member.value for member in UpdateMode)
        raise InvalidInputError(f"update_mode must be one of: {valid}", field="update_mode") from e


def build_session_changes(request: UpdateSessionRequest) -> tuple[dict[str, Any], UpdateMode]:
    """
    Validate a session update request with business rules.

    Args:
        request: UpdateSessionRequest

    Returns:
        tuple: (column changes, update mode)

    Raises:
        InvalidInputError: Malformed field or nothing to update
    """
    present = request.model_fields_set
    changes: dict[str, Any] = {}

    if "session_date" in present:
        changes["session_date"] = parse_calendar_date(request.session_date, field="session_date")

    for name in CLEARABLE_TEXT_FIELDS:
        if name in present:
            # Empty clears the column
            changes[name] = (getattr(request, name) or "").strip() or None

    if "duration_minutes" in present:
        changes["duration_minutes"] = parse_duration(request.duration_minutes)

    if "status" in present:
        changes["status"] = parse_status(request.status)

    mode = parse_update_mode(request.update_mode)

    if not changes:
        raise InvalidInputError("No valid fields to update")

    return changes, mode


def validate_cohort_link_request(request: UpdateCohortLinkRequest) -> tuple[str, str]:
    """Return the stripped (cohort_name, link) pair; both are required."""
    cohort_name = (request.cohort_name or "").strip()
    link = (request.link or "").strip()
    if not cohort_name or not link:
        raise InvalidInputError("cohortName and link are required")
    return cohort_name, link
