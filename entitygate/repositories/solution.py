"""SolutionRepository with CRUD operations and lookup by bug."""

import time

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from entitygate.core.database import fits_integer_column
from entitygate.core.logging import get_logger
from entitygate.models.solution import Solution
from entitygate.repositories.base import EntityRepository

logger = get_logger(__name__)


class SolutionRepository(EntityRepository[Solution]):
    """Repository for Solution CRUD operations."""

    model = Solution
    TABLE_NAME = "solutions"
    ENTITY_NAME = "Solution"

    async def get_by_bug(self, session: AsyncSession, bug_id: int) -> list[Solution]:
        """Get all solutions attached to a bug.

        Args:
            session: Async SQLAlchemy session
            bug_id: Bug identifier

        Returns:
            List of Solution instances ordered by id

        Raises:
            SQLAlchemyError: On database errors
        """
        start_time = time.monotonic()
        logger.debug("Fetching solutions by bug ID", extra={"bug_id": bug_id})

        if not fits_integer_column(bug_id):
            return []

        try:
            result = await session.execute(
                select(Solution).where(Solution.bug_id == bug_id).order_by(Solution.id)
            )
            solutions = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(
                "Failed to fetch solutions by bug ID",
                extra={
                    "bug_id": bug_id,
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                },
                exc_info=True,
            )
            raise

        self._log_completion(
            "Bug solutions fetch completed",
            f"SELECT FROM solutions WHERE bug_id={bug_id}",
            start_time,
            bug_id=bug_id,
            count=len(solutions),
        )
        return solutions
