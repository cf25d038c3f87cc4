"""
Scheduler error handling utilities.

Provides a decorator that translates domain exceptions raised by the
scheduler services into JSON error responses with a uniform body:
``{"success": false, "error": ..., "details": ...}``.

Diagnostic ``details`` are dropped when running in production.

Dependencies: fastapi, cohort_backend.core.exceptions, cohort_backend.observability
System role: Router-boundary error translation
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status
from fastapi.responses import JSONResponse

from cohort_backend.configs import get_settings
from cohort_backend.core.exceptions import (
    CohortNotFoundError,
    CohortSchedulerException,
    InvalidInputError,
    NoSessionsError,
    PartialWriteError,
    ScheduleConflictError,
    SessionNotFoundError,
)
from cohort_backend.models.common import ErrorResponse
from cohort_backend.observability.log_utils import (
    log_exception_with_context,
    log_with_context,
    summarize_failures,
)

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])


def error_response(
    status_code: int,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    """
    Build an error response, omitting details in production.

    Args:
        status_code: HTTP status code
        message: Error message for the ``error`` field
        details: Diagnostic context

    Returns:
        JSONResponse: Serialized ErrorResponse
    """
    if get_settings().is_production:
        details = None
    body = ErrorResponse(error=message, details=details or None)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
    )


def handle_scheduler_errors(func: F) -> F:
    """
    Decorator to handle scheduler errors and transform them into JSON error responses.

    This centralizes:
    - Logging of errors with context
    - Mapping specific exceptions to HTTP status codes
    - Ensuring uniform error response formats
    """
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except (CohortNotFoundError, NoSessionsError, SessionNotFoundError) as e:
            log_with_context(logger, logging.WARNING, "Resource not found", error=e.message, **e.details)
            return error_response(status.HTTP_404_NOT_FOUND, e.message, e.details)

        except ScheduleConflictError as e:
            log_with_context(
                logger,
                logging.WARNING,
                "Session date conflict",
                error=e.message,
                conflicting_session_numbers=e.conflicting_session_numbers,
            )
            return error_response(status.HTTP_400_BAD_REQUEST, e.message, e.details)

        except InvalidInputError as e:
            log_with_context(logger, logging.WARNING, "Invalid scheduler request", error=e.message, **e.details)
            return error_response(status.HTTP_400_BAD_REQUEST, e.message, e.details)

        except PartialWriteError as e:
            log_exception_with_context(
                logger,
                "Session writes failed",
                e,
                failed_sessions=summarize_failures(e.failures),
                applied=e.applied,
            )
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, e.message, e.details)

        except CohortSchedulerException as e:
            log_exception_with_context(logger, "Scheduler operation failed", e)
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, e.message, e.details)

        except Exception as e:
            log_exception_with_context(logger, "Unexpected failure in scheduler operation", e)
            return error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "Internal server error",
                {"error": str(e)},
            )

    return wrapper  # type: ignore
