"""API-specific dependencies."""

# Re-export common dependencies
from .auth import AdminIdentity, require_admin
from .dependencies import (
    get_cohort_session_service,
    get_rearrangement_service,
    get_settings_dependency,
    get_weekly_pattern,
)

__all__ = [
    "AdminIdentity",
    "get_cohort_session_service",
    "get_rearrangement_service",
    "get_settings_dependency",
    "get_weekly_pattern",
    "require_admin",
]
