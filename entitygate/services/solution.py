"""SolutionService with id-presence validation.

Orchestrates business logic for Solution entities between the API layer
and SolutionRepository. Creating and updating are separate operations:
a new solution must not carry an id, an update must.
"""

import time
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from entitygate.core.logging import get_logger
from entitygate.models.solution import Solution
from entitygate.repositories.base import EntityNotFoundError
from entitygate.repositories.solution import SolutionRepository
from entitygate.schemas.solution import SolutionPayload

logger = get_logger(__name__)

# Threshold for logging slow operations
SLOW_OPERATION_THRESHOLD_MS = 1000  # 1 second


class SolutionServiceError(Exception):
    """Base exception for SolutionService errors."""

    pass


class SolutionValidationError(SolutionServiceError):
    """Raised when a solution payload is rejected before reaching the store.

    ``reason`` is a stable machine-readable key ('idexists', 'idnull').
    """

    def __init__(self, field: str, value: Any, message: str, reason: str):
        self.field = field
        self.value = value
        self.message = message
        self.reason = reason
        super().__init__(message)


class SolutionService:
    """Service for Solution business logic and validation."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session.

        Args:
            session: Async SQLAlchemy session
        """
        self.session = session
        self.repository = SolutionRepository()
        logger.debug("SolutionService initialized")

    async def create_solution(self, payload: SolutionPayload) -> Solution:
        """Create a new solution.

        Args:
            payload: Solution data without an id

        Returns:
            Created Solution with its store-assigned id

        Raises:
            SolutionValidationError: If the payload already carries an id
        """
        start_time = time.monotonic()
        logger.debug(
            "Creating solution",
            extra={"bug_id": payload.bug_id, "title": payload.title[:50]},
        )

        if payload.id is not None:
            logger.warning(
                "Solution validation failed",
                extra={"field": "id", "value": payload.id, "reason": "idexists"},
            )
            raise SolutionValidationError(
                "id",
                payload.id,
                "A new solution cannot already have an ID",
                "idexists",
            )

        solution = await self.repository.insert(
            self.session, Solution(**payload.model_dump(exclude={"id"}))
        )

        self._log_timing("create_solution", start_time, solution_id=solution.id)
        logger.info(
            "Solution created",
            extra={"solution_id": solution.id, "bug_id": solution.bug_id},
        )
        return solution

    async def update_solution(self, payload: SolutionPayload) -> Solution:
        """Replace an existing solution.

        Args:
            payload: Solution data including the id of the row to replace

        Returns:
            Updated Solution

        Raises:
            SolutionValidationError: If the payload has no id
            EntityNotFoundError: If no solution has that id
        """
        start_time = time.monotonic()
        logger.debug(
            "Updating solution",
            extra={"solution_id": payload.id, "bug_id": payload.bug_id},
        )

        if payload.id is None:
            logger.warning(
                "Solution validation failed",
                extra={"field": "id", "value": None, "reason": "idnull"},
            )
            raise SolutionValidationError("id", None, "Invalid id", "idnull")

        solution = await self.repository.update(
            self.session, Solution(**payload.model_dump())
        )

        self._log_timing("update_solution", start_time, solution_id=solution.id)
        logger.info("Solution updated", extra={"solution_id": solution.id})
        return solution

    async def get_solution(self, solution_id: int) -> Solution:
        """Get a solution by ID.

        Raises:
            EntityNotFoundError: If the solution does not exist
        """
        solution = await self.repository.get_by_id(self.session, solution_id)
        if solution is None:
            raise EntityNotFoundError(SolutionRepository.ENTITY_NAME, solution_id)
        return solution

    async def list_solutions(self) -> list[Solution]:
        return await self.repository.get_all(self.session)

    async def list_solutions_for_bug(self, bug_id: int) -> list[Solution]:
        return await self.repository.get_by_bug(self.session, bug_id)

    async def delete_solution(self, solution_id: int) -> bool:
        """Delete a solution if it exists.

        Deleting an absent id is a no-op.

        Returns:
            True if a row was removed, False if the id was absent
        """
        deleted = await self.repository.delete(
            self.session, solution_id, missing_ok=True
        )
        if deleted:
            logger.info("Solution deleted", extra={"solution_id": solution_id})
        else:
            logger.debug(
                "Solution already absent on delete",
                extra={"solution_id": solution_id},
            )
        return deleted

    def _log_timing(self, operation: str, start_time: float, **extra: Any) -> None:
        duration_ms = (time.monotonic() - start_time) * 1000
        if duration_ms > SLOW_OPERATION_THRESHOLD_MS:
            logger.warning(
                f"Slow {operation}",
                extra={**extra, "duration_ms": round(duration_ms, 2)},
            )
