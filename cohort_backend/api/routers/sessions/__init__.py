"""
Sessions router package.

Exports the router for cohort session endpoints.
"""

from .sessions_router import router

__all__ = ["router"]
