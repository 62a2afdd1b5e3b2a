"""Async database engine and session lifecycle management.

A single engine (and its connection pool) is shared by the whole process
through ``_DatabaseManager``. Sessions are opened per request, committed on
success and rolled back on error.
"""

import threading
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from loguru import logger
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from lambda_posts.core.config import get_settings
from lambda_posts.infrastructure.database.base import Base
from lambda_posts.infrastructure.database.models import Post, User

POOL_RECYCLE_SECONDS = 3600  # 1 hour
COMMAND_TIMEOUT_SECONDS = 60


def create_database_engine(database_url: str | None = None) -> AsyncEngine:
    """Create an async SQLAlchemy engine with connection pooling.

    Args:
        database_url: Optional database URL. If not provided, uses the
                     configured database URL from settings.

    Returns:
        AsyncEngine: Configured async engine instance.
    """
    db_config = get_settings().database_config

    engine = create_async_engine(
        database_url or db_config.database_url,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=db_config.pool_pre_ping,
        echo=db_config.echo,
        pool_recycle=POOL_RECYCLE_SECONDS,
        connect_args={"command_timeout": COMMAND_TIMEOUT_SECONDS},
    )

    logger.info(
        "Created database engine - pool_size: {}, max_overflow: {}",
        db_config.pool_size,
        db_config.max_overflow,
    )
    return engine


class _DatabaseManager:
    """Holds the process-wide engine and session factory."""

    def __init__(self) -> None:
        self._engine: AsyncEngine | None = None
        self._async_session_factory: async_sessionmaker[AsyncSession] | None = None
        self._lock = threading.Lock()

    def get_engine(self) -> AsyncEngine:
        """Get or create the async engine instance.

        Returns:
            AsyncEngine: The engine instance.
        """
        if self._engine is None:
            with self._lock:
                if self._engine is None:
                    self._engine = create_database_engine()
        return self._engine

    def get_session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Get or create the async session factory.

        Returns:
            async_sessionmaker[AsyncSession]: The session factory.
        """
        if self._async_session_factory is None:
            engine = self.get_engine()
            with self._lock:
                if self._async_session_factory is None:
                    self._async_session_factory = async_sessionmaker(
                        engine,
                        class_=AsyncSession,
                        expire_on_commit=False,
                    )
                    logger.info("Created async session factory")
        return self._async_session_factory

    async def close(self) -> None:
        """Close the database engine and cleanup connections."""
        if self._engine is not None:
            await self._engine.dispose()
            logger.info("Database engine disposed")
            self._engine = None
            self._async_session_factory = None

    def reset(self) -> None:
        """Reset the manager state. Used primarily for testing."""
        self._engine = None
        self._async_session_factory = None


_db_manager = _DatabaseManager()


def get_engine() -> AsyncEngine:
    """Get or create the global async engine instance.

    Returns:
        AsyncEngine: The global engine instance.
    """
    return _db_manager.get_engine()


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get or create the global async session factory.

    Returns:
        async_sessionmaker[AsyncSession]: The global session factory.
    """
    return _db_manager.get_session_factory()


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """Get an async database session with automatic cleanup.

    The session is committed on success or rolled back on error.

    Yields:
        AsyncSession: Database session for performing operations.

    Example:
        async with get_async_session() as session:
            users = await UserRepository(session).get()
    """
    async_session_factory = get_session_factory()
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
            logger.debug("Database session committed successfully")
        except Exception:
            await session.rollback()
            logger.debug("Database session rolled back due to error")
            raise


async def create_tables() -> None:
    """Create the users and posts tables if they do not exist yet."""
    tables = [User.__table__, Post.__table__]
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all, tables=tables)
    logger.info("Database tables ensured: {}", ", ".join(t.name for t in tables))


async def close_database() -> None:
    """Close the database engine and cleanup connections."""
    await _db_manager.close()


async def check_database_connection() -> tuple[bool, str | None]:
    """Check if database connection is available.

    Returns:
        tuple[bool, str | None]: Whether the database answered, and the
            error message if it did not.
    """
    try:
        engine = get_engine()
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
            _ = result.scalar()
    except (SQLAlchemyError, OSError) as e:
        return False, str(e)
    else:
        return True, None
