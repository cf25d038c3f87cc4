"""
Exception hierarchy for the cohort scheduler.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class CohortSchedulerException(Exception):
    """Base exception for all cohort scheduler errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging

        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class InvalidInputError(CohortSchedulerException):
    """Raised when request parameters are missing or malformed."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class CohortNotFoundError(CohortSchedulerException):
    """Raised when a cohort cannot be resolved by id or name."""

    def __init__(
        self,
        cohort_id: str | None = None,
        cohort_name: str | None = None,
    ) -> None:
        details: dict[str, Any] = {}
        if cohort_id:
            details["cohort_id"] = cohort_id
        if cohort_name:
            details["cohort_name"] = cohort_name
        message = f'Cohort not found: "{cohort_name}"' if cohort_name and not cohort_id else "Cohort not found"
        super().__init__(message, details)


class NoSessionsError(CohortSchedulerException):
    """Raised when a cohort has no sessions to schedule."""

    def __init__(self, cohort_id: str) -> None:
        super().__init__("No sessions found for this cohort", {"cohort_id": cohort_id})


class SessionNotFoundError(CohortSchedulerException):
    """Raised when a session cannot be found."""

    def __init__(self, session_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize session not found error.

        Args:
            session_id: ID of the missing session
            details: Additional context
        """
        details = details or {}
        details["session_id"] = session_id
        super().__init__("Session not found", details)


class ScheduleConflictError(CohortSchedulerException):
    """Raised when a new date collides with a session that will not move."""

    def __init__(
        self,
        message: str,
        conflicting_session_numbers: list[int],
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["conflicting_session_numbers"] = conflicting_session_numbers
        self.conflicting_session_numbers = conflicting_session_numbers
        super().__init__(message, details)


class PartialWriteError(CohortSchedulerException):
    """
    Raised when one or more session writes fail during a multi-row update.

    The enclosing transaction is rolled back, so ``applied`` reports how many
    writes survived (always zero for transactional callers).
    """

    def __init__(
        self,
        message: str,
        failures: list[dict[str, Any]],
        applied: int = 0,
    ) -> None:
        self.failures = failures
        self.applied = applied
        super().__init__(message, {"failures": failures, "applied": applied})
