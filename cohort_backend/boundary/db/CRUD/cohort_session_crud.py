"""
Cohort session CRUD operations.

Provides the ordered, filtered reads and the date writes the scheduler
needs over the cohort_sessions table.

Dependencies: sqlalchemy, cohort_backend.boundary.db.models
System role: Session persistence operations for scheduling
"""

from datetime import date
from typing import Sequence
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from cohort_backend.boundary.db.models.cohort_session_model import CohortSessionModel
from cohort_backend.boundary.db.CRUD.base_crud import BaseCRUD


class CohortSessionCRUD(BaseCRUD[CohortSessionModel]):
    """
    CRUD operations for CohortSessionModel.

    Extends BaseCRUD with cohort-scoped queries ordered by session number,
    same-date lookups for conflict detection, and single-column date writes.
    """

    def __init__(self) -> None:
        """Initialize CohortSessionCRUD with CohortSessionModel."""
        super().__init__(CohortSessionModel)

    async def get_with_cohort(
        self,
        session: AsyncSession,
        id: UUID,
    ) -> CohortSessionModel | None:
        """
        Retrieve a session with its cohort eagerly loaded.

        Args:
            session: Async database session
            id: Session UUID

        Returns:
            CohortSessionModel with cohort loaded, None if not found
        """
        stmt = (
            select(CohortSessionModel)
            .where(CohortSessionModel.id == id)
            .options(selectinload(CohortSessionModel.cohort))
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_cohort(
        self,
        session: AsyncSession,
        cohort_id: UUID,
    ) -> Sequence[CohortSessionModel]:
        """
        Retrieve every session of a cohort in session_number order.

        Args:
            session: Async database session
            cohort_id: Cohort UUID

        Returns:
            Sequence of CohortSessionModels, ascending by session_number
        """
        stmt = (
            select(CohortSessionModel)
            .where(CohortSessionModel.cohort_id == cohort_id)
            .order_by(CohortSessionModel.session_number.asc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_on_date(
        self,
        session: AsyncSession,
        cohort_id: UUID,
        session_date: date,
        exclude_id: UUID | None = None,
    ) -> Sequence[CohortSessionModel]:
        """
        Retrieve sessions of a cohort already scheduled on a date.

        Args:
            session: Async database session
            cohort_id: Cohort UUID
            session_date: Date to look up
            exclude_id: Session to leave out (the one being edited)

        Returns:
            Sequence of CohortSessionModels on that date
        """
        stmt = select(CohortSessionModel).where(
            CohortSessionModel.cohort_id == cohort_id,
            CohortSessionModel.session_date == session_date,
        )
        if exclude_id is not None:
            stmt = stmt.where(CohortSessionModel.id != exclude_id)
        result = await session.execute(stmt.order_by(CohortSessionModel.session_number.asc()))
        return result.scalars().all()

    async def get_after_number(
        self,
        session: AsyncSession,
        cohort_id: UUID,
        session_number: int,
    ) -> Sequence[CohortSessionModel]:
        """Retrieve sessions numbered strictly after ``session_number``, ascending."""
        stmt = (
            select(CohortSessionModel)
            .where(
                CohortSessionModel.cohort_id == cohort_id,
                CohortSessionModel.session_number > session_number,
            )
            .order_by(CohortSessionModel.session_number.asc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_before_number(
        self,
        session: AsyncSession,
        cohort_id: UUID,
        session_number: int,
    ) -> Sequence[CohortSessionModel]:
        """Retrieve sessions numbered strictly before ``session_number``, ascending."""
        stmt = (
            select(CohortSessionModel)
            .where(
                CohortSessionModel.cohort_id == cohort_id,
                CohortSessionModel.session_number < session_number,
            )
            .order_by(CohortSessionModel.session_number.asc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_all_with_cohort(
        self,
        session: AsyncSession,
        cohort_id: UUID | None = None,
    ) -> Sequence[CohortSessionModel]:
        """
        Retrieve sessions with their cohorts, ordered by date then number.

        Args:
            session: Async database session
            cohort_id: Restrict to one cohort when given

        Returns:
            Sequence of CohortSessionModels with cohort loaded
        """
        stmt = select(CohortSessionModel).options(selectinload(CohortSessionModel.cohort))
        if cohort_id is not None:
            stmt = stmt.where(CohortSessionModel.cohort_id == cohort_id)
        stmt = stmt.order_by(
            CohortSessionModel.session_date.asc(),
            CohortSessionModel.session_number.asc(),
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def update_date(
        self,
        session: AsyncSession,
        id: UUID,
        session_date: date,
    ) -> bool:
        """
        Write a new date for one session.

        Args:
            session: Async database session
            id: Session UUID
            session_date: New calendar date

        Returns:
            True if a row was updated, False if the session no longer exists
        """
        stmt = (
            update(CohortSessionModel)
            .where(CohortSessionModel.id == id)
            .values(session_date=session_date)
        )
        result = await session.execute(stmt)
        return result.rowcount > 0

    async def update_link_for_cohort(
        self,
        session: AsyncSession,
        cohort_id: UUID,
        link: str,
    ) -> int:
        """
        Set the same call link on every session of a cohort.

        Args:
            session: Async database session
            cohort_id: Cohort UUID
            link: Video call URL

        Returns:
            Number of sessions updated
        """
        stmt = (
            update(CohortSessionModel)
            .where(CohortSessionModel.cohort_id == cohort_id)
            .values(link=link)
        )
        result = await session.execute(stmt)
        return result.rowcount


cohort_session_crud = CohortSessionCRUD()
