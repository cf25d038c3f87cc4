"""
Cohorts router package.

Exports the router for cohort scheduling endpoints.
"""

from .cohorts_router import router

__all__ = ["router"]
