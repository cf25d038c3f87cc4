"""
Cohort CRUD operations.

Dependencies: sqlalchemy, cohort_backend.boundary.db.models
System role: Cohort lookup and status persistence
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cohort_backend.boundary.db.models.cohort_model import CohortModel, CohortStatus
from cohort_backend.boundary.db.CRUD.base_crud import BaseCRUD


class CohortCRUD(BaseCRUD[CohortModel]):
    """CRUD operations for CohortModel."""

    def __init__(self) -> None:
        """Initialize CohortCRUD with CohortModel."""
        super().__init__(CohortModel)

    async def get_by_name(
        self,
        session: AsyncSession,
        name: str,
    ) -> CohortModel | None:
        """
        Retrieve cohort by its unique name.

        Args:
            session: Async database session
            name: Exact cohort name

        Returns:
            CohortModel if found, None otherwise
        """
        stmt = select(CohortModel).where(CohortModel.name == name)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def update_status(
        self,
        session: AsyncSession,
        id: UUID,
        status: CohortStatus,
    ) -> CohortModel | None:
        """Set a cohort's lifecycle status."""
        return await self.update_by_id(session, id, status=status)


cohort_crud = CohortCRUD()
