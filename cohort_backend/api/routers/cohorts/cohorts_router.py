"""
Cohort scheduling API endpoints.

Routes:
- POST /cohorts/rearrange-sessions - Recompute every session date of a cohort

Dependencies: cohort_backend.application.services, cohort_backend.models
System role: Cohort scheduling HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from cohort_backend.application.services.rearrangement_service import (
    SessionRearrangementService,
)
from cohort_backend.api.deps.auth import AdminIdentity, require_admin
from cohort_backend.api.deps.dependencies import get_rearrangement_service
from cohort_backend.api.routers.router_utils.error_handling import handle_scheduler_errors
from cohort_backend.models.cohort import (
    RearrangeSessionsRequest,
    RearrangeSessionsResponse,
)

from .cohort_validators import validate_rearrange_request
from .cohort_responses import map_rearrangement_to_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cohorts", tags=["cohorts"])


@router.post("/rearrange-sessions", response_model=RearrangeSessionsResponse)
@handle_scheduler_errors
async def rearrange_sessions(
    request: RearrangeSessionsRequest,
    admin: AdminIdentity = Depends(require_admin),
    rearrangement_service: SessionRearrangementService = Depends(get_rearrangement_service),
) -> RearrangeSessionsResponse:
    """
    Recompute all session dates of a cohort from a start date.

    Sessions are placed on the weekly pattern in session-number order, with
    pinned fixed dates honoured exactly. With ``dryRun`` the schedule is
    returned without being saved.

    Args:
        request: RearrangeSessionsRequest with cohort identifier and start date
        admin: Authenticated administrator
        rearrangement_service: Injected SessionRearrangementService

    Returns:
        RearrangeSessionsResponse: The computed schedule

    Raises:
        HTTPException(401): Not an administrator
    """
    arguments = validate_rearrange_request(request)

    logger.info(
        "Rearranging cohort sessions",
        extra={
            "admin_id": admin.admin_id,
            "cohort_id": str(arguments.cohort_id) if arguments.cohort_id else None,
            "cohort_name": arguments.cohort_name,
            "start_date": arguments.start_date.isoformat(),
            "dry_run": arguments.dry_run,
        },
    )

    result = await rearrangement_service.rearrange(
        start_date=arguments.start_date,
        cohort_id=arguments.cohort_id,
        cohort_name=arguments.cohort_name,
        fixed_dates=arguments.fixed_dates,
        dry_run=arguments.dry_run,
    )

    return map_rearrangement_to_response(result)
