"""
Observability module.

Provides logging configuration, correlation ID tracking, request logging
middleware and safe structured-logging helpers.
"""

from cohort_backend.observability.correlation import correlation_scope, get_correlation_id
from cohort_backend.observability.logger import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
    "correlation_scope",
    "get_correlation_id",
]
