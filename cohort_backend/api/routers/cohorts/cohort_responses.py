"""
Cohort response mapping utilities.

Transforms rearrangement results into Pydantic response models.

Dependencies: cohort_backend.application.services, cohort_backend.models.cohort
System role: Cohort response transformation
"""

from cohort_backend.application.services.rearrangement_service import RearrangementResult
from cohort_backend.core.schedule_pattern import ScheduledSession
from cohort_backend.models.cohort import RearrangeSessionsResponse, ScheduleEntry


def map_schedule_entry(entry: ScheduledSession) -> ScheduleEntry:
    return ScheduleEntry(
        session_number=entry.session_number,
        date=entry.session_date.isoformat(),
        day=entry.day,
    )


def map_rearrangement_to_response(result: RearrangementResult) -> RearrangeSessionsResponse:
    """
    Transform a rearrangement result into RearrangeSessionsResponse.

    Args:
        result: Computed (and possibly persisted) schedule

    Returns:
        RearrangeSessionsResponse: Pydantic model for API response
    """
    count = len(result.schedule)
    if result.persisted:
        message = f"Successfully rearranged {count} sessions for {result.cohort_name}"
    else:
        message = f"Computed {count} session dates for {result.cohort_name} (not saved)"

    return RearrangeSessionsResponse(
        message=message,
        sessions_updated=count if result.persisted else 0,
        start_date=result.start_date.isoformat(),
        end_date=result.end_date.isoformat(),
        schedule=[map_schedule_entry(entry) for entry in result.schedule],
        dry_run=not result.persisted,
    )
