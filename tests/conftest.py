"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory database session, cohort/session seeding, service mocks,
admin identity overrides
Dependencies: pytest, sqlalchemy, aiosqlite, fastapi
System role: Test infrastructure and fixture management
"""

import uuid
from datetime import date, datetime, timezone
from unittest.mock import AsyncMock

import pytest


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup (lazy imported to avoid settings issues)
    """
    from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
    from sqlalchemy.pool import StaticPool
    from cohort_backend.boundary.db.base import Base

    # Use SQLite in-memory database for tests
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # Create session factory
    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    # Create session for test
    async with async_session() as session:
        yield session
        await session.rollback()

    # Cleanup
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def seed_cohort(test_async_db):
    """
    Factory fixture creating a cohort with sessions on the given dates.

    Usage:
        cohort, sessions = await seed_cohort("Cohort 1", [date(2026, 1, 5), ...])

    Sessions are numbered 1..N in the order of ``dates`` and committed.
    """
    from cohort_backend.boundary.db.CRUD.cohort_crud import cohort_crud
    from cohort_backend.boundary.db.CRUD.cohort_session_crud import cohort_session_crud

    async def _seed(name: str, dates: list[date], **cohort_fields):
        cohort = await cohort_crud.create(test_async_db, name=name, **cohort_fields)
        sessions = []
        for number, session_date in enumerate(dates, start=1):
            sessions.append(
                await cohort_session_crud.create(
                    test_async_db,
                    cohort_id=cohort.id,
                    session_number=number,
                    session_date=session_date,
                    topic=f"Topic {number}",
                    duration_minutes=90,
                )
            )
        await test_async_db.commit()
        return cohort, sessions

    return _seed


@pytest.fixture
def stored_dates(test_async_db):
    """Read back session dates of a cohort keyed by session number, bypassing the identity map."""
    from sqlalchemy import select
    from cohort_backend.boundary.db.models.cohort_session_model import CohortSessionModel

    async def _read(cohort_id) -> dict[int, date]:
        stmt = (
            select(CohortSessionModel)
            .where(CohortSessionModel.cohort_id == cohort_id)
            .execution_options(populate_existing=True)
        )
        result = await test_async_db.execute(stmt)
        return {s.session_number: s.session_date for s in result.scalars().all()}

    return _read


@pytest.fixture
def stored_links(test_async_db):
    """Read back session links of a cohort keyed by session number, bypassing the identity map."""
    from sqlalchemy import select
    from cohort_backend.boundary.db.models.cohort_session_model import CohortSessionModel

    async def _read(cohort_id) -> dict[int, str | None]:
        stmt = (
            select(CohortSessionModel)
            .where(CohortSessionModel.cohort_id == cohort_id)
            .execution_options(populate_existing=True)
        )
        result = await test_async_db.execute(stmt)
        return {s.session_number: s.link for s in result.scalars().all()}

    return _read


@pytest.fixture
def admin_identity():
    """Authenticated administrator returned by the overridden identity check."""
    from cohort_backend.api.deps.auth import AdminIdentity

    return AdminIdentity(admin_id="admin-1", email="admin@example.com")


@pytest.fixture
def mock_rearrangement_service():
    """
    Create mock SessionRearrangementService for testing.

    Returns:
        AsyncMock: Mocked service with async rearrange method
    """
    service = AsyncMock()
    service.rearrange = AsyncMock()
    return service


@pytest.fixture
def mock_cohort_session_service():
    """
    Create mock CohortSessionService for testing.

    Returns:
        AsyncMock: Mocked service with async update/list/link methods
    """
    service = AsyncMock()
    service.update_session = AsyncMock()
    service.update_cohort_link = AsyncMock()
    service.list_sessions = AsyncMock(return_value=[])
    return service


@pytest.fixture
def session_row():
    """Build serialized session dictionaries as returned by CohortSessionService."""
    from cohort_backend.boundary.db.models.cohort_model import CohortStatus
    from cohort_backend.boundary.db.models.cohort_session_model import SessionStatus

    def _row(session_number: int = 1, session_date: date = date(2026, 1, 19), **overrides):
        now = datetime(2026, 1, 1, tzinfo=timezone.utc)
        row = {
            "id": uuid.uuid4(),
            "cohort_id": uuid.uuid4(),
            "session_number": session_number,
            "session_date": session_date,
            "topic": f"Topic {session_number}",
            "instructor": None,
            "duration_minutes": 90,
            "link": None,
            "recording_url": None,
            "status": SessionStatus.SCHEDULED,
            "created_at": now,
            "updated_at": now,
            "cohort": {
                "id": uuid.uuid4(),
                "name": "Cohort 1",
                "level": "Beginner",
                "status": CohortStatus.ACTIVE,
            },
        }
        row.update(overrides)
        return row

    return _row
