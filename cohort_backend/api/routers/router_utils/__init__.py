"""
Router utility functions.

Contains helpers shared by the router packages to keep endpoints clean.
"""

from cohort_backend.api.routers.router_utils.error_handling import (
    error_response,
    handle_scheduler_errors,
)

__all__ = [
    "error_response",
    "handle_scheduler_errors",
]
