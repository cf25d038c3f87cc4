"""
Session response mapping utilities.

Transforms serialized session rows into Pydantic response models.

Dependencies: cohort_backend.models.session
System role: Session response transformation
"""

import enum
from typing import Any

from cohort_backend.models.cohort import CohortSummary
from cohort_backend.models.session import CohortSessionResponse, UpdateCohortLinkResponse


def _enum_value(value: Any) -> Any:
    return value.value if isinstance(value, enum.Enum) else value


def map_session_to_response(session_data: dict[str, Any]) -> CohortSessionResponse:
    """
    Transform a session dictionary into CohortSessionResponse.

    Args:
        session_data: Dictionary produced by the session service, with a
            nested ``cohort`` summary dictionary (or None)

    Returns:
        CohortSessionResponse: Pydantic model for API response
    """
    data = dict(session_data)
    data["status"] = _enum_value(data["status"])

    cohort = data.get("cohort")
    if cohort is not None:
        data["cohort"] = CohortSummary(**{**cohort, "status": _enum_value(cohort["status"])})

    return CohortSessionResponse(**data)


def map_sessions_to_response(sessions_data: list[dict[str, Any]]) -> list[CohortSessionResponse]:
    """Transform a list of session dictionaries into CohortSessionResponse models."""
    return [map_session_to_response(session) for session in sessions_data]


def map_link_update_to_response(outcome: dict[str, Any]) -> UpdateCohortLinkResponse:
    """Build the cohort-wide link update response from the service outcome."""
    return UpdateCohortLinkResponse(
        message=f"Updated {outcome['sessions_updated']} sessions for {outcome['cohort_name']}",
        cohort_id=outcome["cohort_id"],
        sessions_updated=outcome["sessions_updated"],
    )
