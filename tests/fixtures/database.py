"""PostgreSQL fixtures for tests that need the real schema.

A dedicated database is created once per test session on the server named by
``DATABASE_CONFIG__DATABASE_URL`` and dropped afterwards. Tables come from
``Base.metadata``, and every test runs inside a transaction that is rolled
back, so rows never leak between tests. When no server answers, the tests
using these fixtures are skipped.
"""

import asyncio
from collections.abc import AsyncGenerator, Coroutine, Generator
from typing import Any

import asyncpg
import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine

from lambda_posts.api.main import create_app
from lambda_posts.core.config import Settings, get_settings
from lambda_posts.infrastructure.database.base import Base
from lambda_posts.infrastructure.database.dependencies import get_db

TEST_DATABASE_NAME = "lambda_posts_test"
CONNECT_TIMEOUT_SECONDS = 5


def _admin_url(database_url_base: str) -> str:
    """Maintenance database URL in the form asyncpg expects."""
    return f"{database_url_base}/postgres".replace(
        "postgresql+asyncpg://", "postgresql://"
    )


def _run_isolated(coro: Coroutine[Any, Any, None]) -> None:
    """Run setup SQL on a private loop, leaving the current event loop alone."""
    loop = asyncio.new_event_loop()
    try:
        loop.run_until_complete(coro)
    finally:
        loop.close()


async def _recreate_database(admin_url: str) -> None:
    conn = await asyncpg.connect(admin_url, timeout=CONNECT_TIMEOUT_SECONDS)
    try:
        await conn.execute(f"DROP DATABASE IF EXISTS {TEST_DATABASE_NAME}")
        await conn.execute(f"CREATE DATABASE {TEST_DATABASE_NAME}")
    finally:
        await conn.close()


async def _drop_database(admin_url: str) -> None:
    conn = await asyncpg.connect(admin_url, timeout=CONNECT_TIMEOUT_SECONDS)
    try:
        await conn.execute(
            "SELECT pg_terminate_backend(pid) FROM pg_stat_activity "
            "WHERE datname = $1 AND pid <> pg_backend_pid()",
            TEST_DATABASE_NAME,
        )
        await conn.execute(f"DROP DATABASE IF EXISTS {TEST_DATABASE_NAME}")
    finally:
        await conn.close()


@pytest.fixture(scope="session")
def database_url() -> Generator[str]:
    """Create the test database and yield its SQLAlchemy URL."""
    database_url_base = get_settings().database_config.database_url.rsplit("/", 1)[0]
    admin_url = _admin_url(database_url_base)

    try:
        _run_isolated(_recreate_database(admin_url))
    except (OSError, asyncpg.PostgresError) as e:
        pytest.skip(f"PostgreSQL is not available: {e}")

    yield f"{database_url_base}/{TEST_DATABASE_NAME}"

    _run_isolated(_drop_database(admin_url))


@pytest.fixture
async def db_engine(database_url: str) -> AsyncGenerator[AsyncEngine]:
    """Engine on the test database with the users and posts tables in place."""
    engine = create_async_engine(database_url, pool_pre_ping=True, pool_size=2)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Session whose changes are rolled back when the test ends."""
    async with db_engine.connect() as connection:
        transaction = await connection.begin()
        session = AsyncSession(bind=connection, expire_on_commit=False)
        try:
            async with session:
                yield session
        finally:
            await transaction.rollback()


@pytest.fixture
def app_with_db(mock_settings: Settings, db_session: AsyncSession) -> FastAPI:
    """Application whose requests share the transactional test session."""
    application = create_app(mock_settings)

    async def override_get_db() -> AsyncGenerator[AsyncSession]:
        yield db_session

    application.dependency_overrides[get_db] = override_get_db
    return application


@pytest.fixture
async def client_with_db(app_with_db: FastAPI) -> AsyncGenerator[AsyncClient]:
    """HTTP client for the application backed by the test database."""
    transport = ASGITransport(app=app_with_db, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
