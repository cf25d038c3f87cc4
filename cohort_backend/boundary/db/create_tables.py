"""
Database table creation script.

Creates all tables defined in ORM models using SQLAlchemy metadata.

Dependencies: sqlalchemy, cohort_backend.configs
System role: Database schema initialization

Usage:
    python -m cohort_backend.boundary.db.create_tables
"""

import asyncio
import logging

from cohort_backend.boundary.db.base import Base
from cohort_backend.boundary.db.connection import get_async_engine

# Import all models to register them with Base.metadata
from cohort_backend.boundary.db.models.cohort_model import CohortModel  # noqa: F401
from cohort_backend.boundary.db.models.cohort_session_model import CohortSessionModel  # noqa: F401

logger = logging.getLogger(__name__)


async def create_all_tables() -> None:
    """
    Create all database tables from registered ORM models.

    Idempotent: CREATE TABLE IF NOT EXISTS for each model, so safe to run
    multiple times. Existing tables remain unchanged.

    Raises:
        SQLAlchemyError: If database connection fails or table creation fails
    """
    engine = get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Tables created", extra={"tables": sorted(Base.metadata.tables)})


async def drop_all_tables() -> None:
    """
    Drop all database tables and their data.

    WARNING: Irreversible data loss. Only use in development environments.
    """
    engine = get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.warning("All tables dropped")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    asyncio.run(create_all_tables())
