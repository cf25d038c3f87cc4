"""
Cohort session API endpoints.

Routes:
- GET /sessions - List sessions with cohort summaries
- PUT /sessions/{session_id} - Update one session (single or shift mode)
- POST /sessions/update-cohort-link - Set one call link on every session of a cohort

Dependencies: cohort_backend.application.services, cohort_backend.models
System role: Cohort session HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from cohort_backend.application.services.cohort_session_service import CohortSessionService
from cohort_backend.api.deps.auth import AdminIdentity, require_admin
from cohort_backend.api.deps.dependencies import get_cohort_session_service
from cohort_backend.api.routers.cohorts.cohort_validators import parse_cohort_id
from cohort_backend.api.routers.router_utils.error_handling import handle_scheduler_errors
from cohort_backend.models.session import (
    SessionListResponse,
    UpdateCohortLinkRequest,
    UpdateCohortLinkResponse,
    UpdateSessionRequest,
    UpdateSessionResponse,
)

from .session_validators import build_session_changes, parse_session_id, validate_cohort_link_request
from .session_responses import (
    map_link_update_to_response,
    map_session_to_response,
    map_sessions_to_response,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.get("", response_model=SessionListResponse)
@handle_scheduler_errors
async def list_sessions(
    cohort_id: str | None = None,
    admin: AdminIdentity = Depends(require_admin),
    session_service: CohortSessionService = Depends(get_cohort_session_service),
) -> SessionListResponse:
    """
    List sessions ordered by date, then session number.

    Args:
        cohort_id: Optional cohort UUID filter
        admin: Authenticated administrator
        session_service: Injected CohortSessionService

    Returns:
        SessionListResponse: Sessions with cohort summaries

    Raises:
        HTTPException(401): Not an administrator
    """
    cohort_uuid = parse_cohort_id(cohort_id) if cohort_id else None
    sessions = await session_service.list_sessions(cohort_uuid)

    logger.info(
        "Sessions retrieved successfully",
        extra={"count": len(sessions), "cohort_id": cohort_id},
    )

    return SessionListResponse(sessions=map_sessions_to_response(sessions))


@router.put("/{session_id}", response_model=UpdateSessionResponse)
@handle_scheduler_errors
async def update_session(
    session_id: str,
    request: UpdateSessionRequest,
    admin: AdminIdentity = Depends(require_admin),
    session_service: CohortSessionService = Depends(get_cohort_session_service),
) -> UpdateSessionResponse:
    """
    Update one session's fields.

    A date change is rejected when another session already holds the date.
    In ``shift`` mode later sessions do not block; they move by the same
    number of days as the edited session.

    Args:
        session_id: Session UUID
        request: UpdateSessionRequest with any subset of editable fields
        admin: Authenticated administrator
        session_service: Injected CohortSessionService

    Returns:
        UpdateSessionResponse: Updated session with cohort summary

    Raises:
        HTTPException(401): Not an administrator
    """
    session_uuid = parse_session_id(session_id)
    changes, mode = build_session_changes(request)

    logger.info(
        "Updating session",
        extra={
            "admin_id": admin.admin_id,
            "session_id": str(session_uuid),
            "fields": sorted(changes),
            "update_mode": mode.value,
        },
    )

    session = await session_service.update_session(session_uuid, changes, mode)

    return UpdateSessionResponse(session=map_session_to_response(session))


@router.post("/update-cohort-link", response_model=UpdateCohortLinkResponse)
@handle_scheduler_errors
async def update_cohort_link(
    request: UpdateCohortLinkRequest,
    admin: AdminIdentity = Depends(require_admin),
    session_service: CohortSessionService = Depends(get_cohort_session_service),
) -> UpdateCohortLinkResponse:
    """
    Set the same video call link on every session of a cohort.

    Raises:
        HTTPException(401): Not an administrator
    """
    cohort_name, link = validate_cohort_link_request(request)

    logger.info(
        "Updating cohort link",
        extra={"admin_id": admin.admin_id, "cohort_name": cohort_name},
    )

    outcome = await session_service.update_cohort_link(cohort_name, link)

    return map_link_update_to_response(outcome)
