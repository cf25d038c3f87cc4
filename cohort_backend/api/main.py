"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, cohort_backend.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from cohort_backend.boundary.db import get_async_engine
from cohort_backend.observability.logger import configure_logging
from cohort_backend.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware
from .routers.router_utils.error_handling import error_response
from . import api_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    configure_logging()
    logger = logging.getLogger("uvicorn")

    # Startup
    logger.info("Cohort scheduler API starting")

    yield

    # Shutdown
    await get_async_engine().dispose()
    logger.info("Database engine disposed")


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render framework HTTP errors (401, 404, 405) with the common error body."""
    return error_response(exc.status_code, str(exc.detail))


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Render request parsing failures as 400s with the common error body."""
    errors = [{"loc": list(error["loc"]), "msg": error["msg"]} for error in exc.errors()]
    return error_response(400, "Invalid request body", {"errors": errors})


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="Cohort Scheduler API",
        description="Cohort session scheduling: bulk rearrangement and single-session updates",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware (last added runs first)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "cohort_backend.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
