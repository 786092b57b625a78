"""Generic single-entity CRUD repository.

Handles all database operations for one ORM model. The session is passed
into every call so repositories never hold connection state of their own.
Follows the layered architecture pattern: API -> Service -> Repository -> Database.

Every mutating call commits immediately through core.database.transaction.
Update and delete run as a single statement keyed on the primary key and
check the affected row count, so a missing id is reported as
EntityNotFoundError instead of silently doing nothing. Ids outside the range
of an Integer column match no row and never reach the driver.
"""

import time
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import delete, func, inspect, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from entitygate.core.database import Base, fits_integer_column, transaction
from entitygate.core.logging import db_logger, get_logger

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class RepositoryError(Exception):
    """Base exception for repository errors."""

    pass


class EntityNotFoundError(RepositoryError):
    """Raised when no row matches the requested id."""

    def __init__(self, entity: str, entity_id: Any):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")


class ConstraintViolationError(RepositoryError):
    """Raised when the store rejects a write (foreign key, unique, not null)."""

    def __init__(self, entity: str, operation: str, message: str):
        self.entity = entity
        self.operation = operation
        self.message = message
        super().__init__(f"Constraint violation on {entity} {operation}: {message}")


class EntityRepository(Generic[ModelT]):
    """Repository for CRUD operations on a single model.

    Subclasses set ``model``, ``TABLE_NAME`` and ``ENTITY_NAME``.
    """

    model: ClassVar[type[Base]]
    TABLE_NAME: ClassVar[str]
    ENTITY_NAME: ClassVar[str]
    SLOW_OPERATION_THRESHOLD_MS = 1000  # 1 second

    @property
    def _pk_key(self) -> str:
        """Attribute name of the model's primary key."""
        mapper = inspect(self.model)
        return mapper.get_property_by_column(mapper.primary_key[0]).key

    @property
    def _pk(self) -> Any:
        """Primary key attribute of the model."""
        return getattr(self.model, self._pk_key)

    def _pk_value(self, entity: ModelT) -> Any:
        return getattr(entity, self._pk_key)

    def _column_values(self, entity: ModelT) -> dict[str, Any]:
        """Non-key column values of an entity, keyed by attribute name."""
        return {
            attr.key: getattr(entity, attr.key)
            for attr in inspect(self.model).column_attrs
            if attr.key != self._pk_key
        }

    def _log_completion(
        self, message: str, query: str, start_time: float, **extra: Any
    ) -> None:
        duration_ms = (time.monotonic() - start_time) * 1000
        logger.debug(
            message,
            extra={
                "table": self.TABLE_NAME,
                **extra,
                "duration_ms": round(duration_ms, 2),
            },
        )
        if duration_ms > self.SLOW_OPERATION_THRESHOLD_MS:
            db_logger.slow_query(
                query=query,
                duration_ms=duration_ms,
                table=self.TABLE_NAME,
            )

    def _constraint_violation(
        self, error: IntegrityError, operation: str, entity_id: Any = None
    ) -> ConstraintViolationError:
        logger.error(
            f"Failed to {operation} {self.ENTITY_NAME} - integrity error",
            extra={
                "table": self.TABLE_NAME,
                "entity_id": entity_id,
                "error_type": type(error).__name__,
                "error_message": str(error.orig),
            },
            exc_info=True,
        )
        return ConstraintViolationError(
            self.ENTITY_NAME, operation, str(error.orig)
        )

    async def get_by_id(self, session: AsyncSession, entity_id: int) -> ModelT | None:
        """Get an entity by primary key.

        Args:
            session: Async SQLAlchemy session
            entity_id: Primary key value

        Returns:
            Entity instance if found, None otherwise

        Raises:
            SQLAlchemyError: On database errors
        """
        start_time = time.monotonic()
        logger.debug(
            f"Fetching {self.ENTITY_NAME} by ID",
            extra={"table": self.TABLE_NAME, "entity_id": entity_id},
        )

        if not fits_integer_column(entity_id):
            return None

        try:
            result = await session.execute(
                select(self.model).where(self._pk == entity_id)
            )
            entity: ModelT | None = result.scalar_one_or_none()  # type: ignore[assignment]
        except SQLAlchemyError as e:
            logger.error(
                f"Failed to fetch {self.ENTITY_NAME} by ID",
                extra={
                    "table": self.TABLE_NAME,
                    "entity_id": entity_id,
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                },
                exc_info=True,
            )
            raise

        self._log_completion(
            f"{self.ENTITY_NAME} fetch completed",
            f"SELECT FROM {self.TABLE_NAME} WHERE id={entity_id}",
            start_time,
            entity_id=entity_id,
            found=entity is not None,
        )
        return entity

    async def get_all(self, session: AsyncSession) -> list[ModelT]:
        """Get every entity in the table, ordered by primary key.

        Raises:
            SQLAlchemyError: On database errors
        """
        start_time = time.monotonic()
        logger.debug(
            f"Listing {self.ENTITY_NAME} entities",
            extra={"table": self.TABLE_NAME},
        )

        try:
            result = await session.execute(select(self.model).order_by(self._pk))
            entities: list[ModelT] = list(result.scalars().all())  # type: ignore[arg-type]
        except SQLAlchemyError as e:
            logger.error(
                f"Failed to list {self.ENTITY_NAME} entities",
                extra={
                    "table": self.TABLE_NAME,
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                },
                exc_info=True,
            )
            raise

        self._log_completion(
            f"{self.ENTITY_NAME} list completed",
            f"SELECT FROM {self.TABLE_NAME}",
            start_time,
            count=len(entities),
        )
        return entities

    async def insert(self, session: AsyncSession, entity: ModelT) -> ModelT:
        """Insert a new entity and commit.

        The store assigns the identity; it is available on the returned
        instance.

        Raises:
            ConstraintViolationError: If the store rejects the row
            SQLAlchemyError: On other database errors
        """
        start_time = time.monotonic()
        logger.debug(
            f"Creating {self.ENTITY_NAME}",
            extra={"table": self.TABLE_NAME, "values": self._column_values(entity)},
        )

        try:
            async with transaction(session, table=self.TABLE_NAME):
                session.add(entity)
                await session.flush()
            await session.refresh(entity)
        except IntegrityError as e:
            raise self._constraint_violation(e, "insert") from e

        entity_id = self._pk_value(entity)
        self._log_completion(
            f"{self.ENTITY_NAME} created successfully",
            f"INSERT INTO {self.TABLE_NAME}",
            start_time,
            entity_id=entity_id,
        )
        return entity

    async def update(self, session: AsyncSession, entity: ModelT) -> ModelT:
        """Replace the full record whose id matches ``entity`` and commit.

        ``entity`` may be a detached or transient instance; every non-key
        column is written from it.

        Raises:
            EntityNotFoundError: If no row has the entity's id
            ConstraintViolationError: If the store rejects the new values
            SQLAlchemyError: On other database errors
        """
        start_time = time.monotonic()
        entity_id = self._pk_value(entity)
        values = self._column_values(entity)
        logger.debug(
            f"Updating {self.ENTITY_NAME}",
            extra={
                "table": self.TABLE_NAME,
                "entity_id": entity_id,
                "update_fields": list(values.keys()),
            },
        )

        if entity_id is None or not fits_integer_column(entity_id):
            raise EntityNotFoundError(self.ENTITY_NAME, entity_id)

        try:
            async with transaction(session, table=self.TABLE_NAME):
                result = await session.execute(
                    update(self.model)
                    .where(self._pk == entity_id)
                    .values(**values)
                    .execution_options(synchronize_session="evaluate")
                )
        except IntegrityError as e:
            raise self._constraint_violation(e, "update", entity_id) from e

        if result.rowcount == 0:
            logger.debug(
                f"{self.ENTITY_NAME} not found for update",
                extra={"table": self.TABLE_NAME, "entity_id": entity_id},
            )
            raise EntityNotFoundError(self.ENTITY_NAME, entity_id)

        updated = await session.get(self.model, entity_id, populate_existing=True)
        if updated is None:
            # Deleted by a concurrent writer between the update and the re-read
            raise EntityNotFoundError(self.ENTITY_NAME, entity_id)

        self._log_completion(
            f"{self.ENTITY_NAME} updated successfully",
            f"UPDATE {self.TABLE_NAME} WHERE id={entity_id}",
            start_time,
            entity_id=entity_id,
        )
        return updated  # type: ignore[return-value]

    async def delete(
        self, session: AsyncSession, entity_id: int, missing_ok: bool = False
    ) -> bool:
        """Delete an entity by id and commit.

        Args:
            session: Async SQLAlchemy session
            entity_id: Primary key value
            missing_ok: Return False instead of raising when the id is absent

        Returns:
            True if a row was deleted, False if none matched and missing_ok

        Raises:
            EntityNotFoundError: If the id is absent and missing_ok is False
            ConstraintViolationError: If other rows still reference the entity
            SQLAlchemyError: On other database errors
        """
        start_time = time.monotonic()
        logger.debug(
            f"Deleting {self.ENTITY_NAME}",
            extra={"table": self.TABLE_NAME, "entity_id": entity_id},
        )

        deleted = False
        if fits_integer_column(entity_id):
            try:
                async with transaction(session, table=self.TABLE_NAME):
                    result = await session.execute(
                        delete(self.model)
                        .where(self._pk == entity_id)
                        .execution_options(synchronize_session="evaluate")
                    )
            except IntegrityError as e:
                raise self._constraint_violation(e, "delete", entity_id) from e
            deleted = result.rowcount > 0

        self._log_completion(
            f"{self.ENTITY_NAME} delete completed",
            f"DELETE FROM {self.TABLE_NAME} WHERE id={entity_id}",
            start_time,
            entity_id=entity_id,
            deleted=deleted,
        )

        if not deleted and not missing_ok:
            raise EntityNotFoundError(self.ENTITY_NAME, entity_id)
        return deleted

    async def exists(self, session: AsyncSession, entity_id: int) -> bool:
        """Check if an entity exists."""
        if not fits_integer_column(entity_id):
            return False

        try:
            result = await session.execute(
                select(self._pk).where(self._pk == entity_id)
            )
            exists = result.scalar_one_or_none() is not None
        except SQLAlchemyError as e:
            logger.error(
                f"Failed to check {self.ENTITY_NAME} existence",
                extra={
                    "table": self.TABLE_NAME,
                    "entity_id": entity_id,
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                },
                exc_info=True,
            )
            raise

        logger.debug(
            f"{self.ENTITY_NAME} existence check completed",
            extra={"table": self.TABLE_NAME, "entity_id": entity_id, "exists": exists},
        )
        return exists

    async def count(self, session: AsyncSession) -> int:
        """Count rows in the table."""
        try:
            result = await session.execute(
                select(func.count()).select_from(self.model)
            )
            count: int = result.scalar_one()
        except SQLAlchemyError as e:
            logger.error(
                f"Failed to count {self.ENTITY_NAME} entities",
                extra={
                    "table": self.TABLE_NAME,
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                },
                exc_info=True,
            )
            raise

        logger.debug(
            f"{self.ENTITY_NAME} count completed",
            extra={"table": self.TABLE_NAME, "count": count},
        )
        return count
