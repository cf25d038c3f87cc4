"""
Database connection management.

Provides the async SQLAlchemy engine, session factory, and FastAPI dependency
for database session injection.

Dependencies: sqlalchemy, cohort_backend.configs
System role: Database connection lifecycle management
"""

from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import AsyncAdaptedQueuePool

from cohort_backend.configs import get_settings


@lru_cache
def get_async_engine() -> AsyncEngine:
    """
    Create the async SQLAlchemy engine, once per process.

    PostgreSQL gets a queue pool sized from settings with pool_pre_ping=True
    so stale connections are detected before use. SQLite URLs (local
    development) keep the dialect's default pool.

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine

    Raises:
        ArgumentError: If database URL is invalid or engine creation fails

    Usage:
        engine = get_async_engine()
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
    """
    settings = get_settings()
    db_config = settings.database
    url = db_config.async_database_url

    if make_url(url).get_backend_name() == "sqlite":
        return create_async_engine(url, echo=db_config.echo_sql)

    return create_async_engine(
        url,
        echo=db_config.echo_sql,
        poolclass=AsyncAdaptedQueuePool,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
    )


@lru_cache
def get_async_session_factory() -> async_sessionmaker:
    """
    Create async session factory for database operations.

    Sessions use autoflush=False and expire_on_commit=False; services own
    transaction boundaries and call commit/rollback explicitly.

    Returns:
        async_sessionmaker: Async session factory configured for manual transaction control

    Usage:
        SessionFactory = get_async_session_factory()
        async with SessionFactory() as session:
            session.add(obj)
            await session.commit()
    """
    return async_sessionmaker(
        bind=get_async_engine(),
        autoflush=False,
        expire_on_commit=False,
    )


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for async database session injection with automatic cleanup.

    Creates a new async database session for each request and ensures it's closed
    after the route completes, even if exceptions occur.

    Yields:
        AsyncSession: Async SQLAlchemy database session (scoped to request lifetime)

    Usage:
        from fastapi import Depends

        @router.get("/sessions/{id}")
        async def get_session(id: UUID, db: AsyncSession = Depends(get_async_db)):
            return await cohort_session_crud.get_by_id(db, id)
    """
    SessionFactory = get_async_session_factory()
    async with SessionFactory() as session:
        yield session
