"""
Base Repository Class.

============================================================
PURPOSE
============================================================
Provides common functionality for all repositories including:
- Session management (one short-lived AsyncSession per call)
- Error handling wrappers
- Logging setup

============================================================
USAGE
============================================================
class MyRepository(BaseRepository[MyModel]):
    def __init__(self, session_factory):
        super().__init__(session_factory, MyModel, "MyRepository")

============================================================
"""

import logging
from typing import Any, Generic, List, NoReturn, Optional, Type, TypeVar

from sqlalchemy.exc import (
    IntegrityError as SQLAlchemyIntegrityError,
    OperationalError,
    SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from storage.models.base import Base
from storage.repositories.exceptions import (
    ConnectionError,
    DuplicateRecordError,
    IntegrityError,
    QueryError,
)


# Type variable for ORM model
T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Each public call opens its own session from the injected
    factory, so concurrent calls (asyncio.gather) are safe.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        model_class: Type[T],
        repository_name: str
    ) -> None:
        """
        Initialize the repository.

        Args:
            session_factory: SQLAlchemy async session factory (injected)
            model_class: The ORM model class this repository manages
            repository_name: Name for logging and error messages
        """
        self._session_factory = session_factory
        self._model_class = model_class
        self._repository_name = repository_name
        self._logger = logging.getLogger(f"repository.{repository_name}")

    @property
    def model_class(self) -> Type[T]:
        return self._model_class

    @property
    def repository_name(self) -> str:
        return self._repository_name

    # =========================================================
    # PROTECTED HELPER METHODS
    # =========================================================

    def _handle_db_error(self, error: SQLAlchemyError, operation: str) -> NoReturn:
        """
        Wrap a database error in a repository exception.

        Raises:
            RepositoryException: Always
        """
        self._logger.error(f"Database error in {operation}: {error}", exc_info=True)

        if isinstance(error, OperationalError):
            raise ConnectionError(self._repository_name, operation, str(error)) from error

        if isinstance(error, SQLAlchemyIntegrityError):
            error_str = str(error).lower()
            if "duplicate" in error_str or "unique" in error_str:
                raise DuplicateRecordError(self._repository_name, operation, str(error)) from error
            raise IntegrityError(self._repository_name, operation, str(error)) from error

        raise QueryError(self._repository_name, operation, str(error)) from error

    async def _fetch_all(self, stmt: Any, operation: str) -> List[T]:
        """Execute a select statement and return all rows."""
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            self._handle_db_error(e, operation)

    async def _fetch_one(self, stmt: Any, operation: str) -> Optional[T]:
        """Execute a select statement and return the first row or None."""
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                return result.scalars().first()
        except SQLAlchemyError as e:
            self._handle_db_error(e, operation)

    async def _get_by_id(self, record_id: int) -> Optional[T]:
        """Get an entity by its primary key."""
        try:
            async with self._session_factory() as session:
                return await session.get(self._model_class, record_id)
        except SQLAlchemyError as e:
            self._handle_db_error(e, "get_by_id")

    async def _insert(self, entity: T) -> T:
        """
        Insert an entity and commit.

        Returns:
            The entity with its generated primary key populated
        """
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    session.add(entity)
                self._logger.debug(f"Inserted {self._model_class.__name__} id={getattr(entity, 'id', None)}")
                return entity
        except SQLAlchemyError as e:
            self._handle_db_error(e, "insert")
