"""
Storage - Database.

============================================================
RESPONSIBILITY
============================================================
Manages database connections and sessions.

- Provides connection pooling
- Exposes an async session factory to repositories
- Handles connection lifecycle
- Health checks

============================================================
DESIGN PRINCIPLES
============================================================
- Async by default
- Repositories open one short-lived session per call, so
  concurrent lookups never share a session
- No transaction spans more than one repository call

============================================================
DATABASE REQUIREMENTS
============================================================
- PostgreSQL in production (postgresql+asyncpg://...)
- SQLite for local runs and tests (sqlite+aiosqlite://...)
- SQLAlchemy 2.x async ORM

============================================================
"""

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from storage.models.base import Base


logger = logging.getLogger(__name__)


# ============================================================
# CONFIGURATION
# ============================================================

@dataclass(frozen=True)
class DatabaseConfig:
    """Database connection configuration."""

    url: str = "sqlite+aiosqlite:///./brokerage.db"
    """Async SQLAlchemy URL."""

    echo: bool = False
    """Log SQL statements."""

    pool_size: int = 10
    """Connections kept in the pool (ignored for SQLite)."""

    max_overflow: int = 20
    """Connections allowed beyond pool_size (ignored for SQLite)."""

    pool_timeout_seconds: int = 30
    """Seconds to wait for an available connection."""

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @property
    def safe_url(self) -> str:
        """URL without credentials, for logging."""
        return self.url.split("@")[-1]


# ============================================================
# DATABASE
# ============================================================

class Database:
    """
    Owns the async engine and session factory.

    Usage:
        database = Database(DatabaseConfig(url=...))
        await database.connect()
        repo = OrderRepository(database.session_factory)
        ...
        await database.disconnect()
    """

    def __init__(self, config: DatabaseConfig):
        self._config = config
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def config(self) -> DatabaseConfig:
        return self._config

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database is not connected")
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        if self._session_factory is None:
            raise RuntimeError("Database is not connected")
        return self._session_factory

    async def connect(self) -> None:
        """Create the engine and session factory."""
        if self._engine is not None:
            return

        logger.info(f"Creating database engine for: {self._config.safe_url}")

        if self._config.is_sqlite:
            self._engine = create_async_engine(self._config.url, echo=self._config.echo)
        else:
            self._engine = create_async_engine(
                self._config.url,
                echo=self._config.echo,
                pool_size=self._config.pool_size,
                max_overflow=self._config.max_overflow,
                pool_timeout=self._config.pool_timeout_seconds,
                pool_pre_ping=True,
            )

        self._session_factory = async_sessionmaker(
            self._engine,
            expire_on_commit=False,
            autoflush=False,
        )

    async def disconnect(self) -> None:
        """Dispose the engine and its pool."""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Database engine disposed")

    async def create_all(self) -> None:
        """Create all tables known to the declarative base."""
        # Register the models on Base.metadata
        import storage.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ensured")

    async def health_check(self) -> bool:
        """Return True if a trivial query succeeds."""
        if self._engine is None:
            return False
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.error(f"Database health check failed: {e}")
            return False
