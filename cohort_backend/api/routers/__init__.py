"""API routers."""

from .cohorts import router as cohorts_router
from .health import router as health_router
from .sessions import router as sessions_router

__all__ = [
    "cohorts_router",
    "health_router",
    "sessions_router",
]
