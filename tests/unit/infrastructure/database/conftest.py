"""Shared fixtures for database unit tests."""

from collections.abc import Generator
from typing import cast

import pytest
from pytest_mock import MockerFixture, MockType
from sqlalchemy.ext.asyncio import AsyncSession

from lambda_posts.infrastructure.database.repositories import (
    PostRepository,
    UserRepository,
)
from lambda_posts.infrastructure.database.session import _db_manager


@pytest.fixture
def mock_session(mocker: MockerFixture) -> AsyncSession:
    """Create a properly mocked async session."""
    mock: AsyncSession = mocker.AsyncMock(spec=AsyncSession)
    return mock


@pytest.fixture
def user_repository(mock_session: AsyncSession) -> UserRepository:
    """Provide a user repository over the mocked session."""
    return UserRepository(mock_session)


@pytest.fixture
def post_repository(mock_session: AsyncSession) -> PostRepository:
    """Provide a post repository over the mocked session."""
    return PostRepository(mock_session)


@pytest.fixture
def query_result(mocker: MockerFixture, mock_session: AsyncSession) -> MockType:
    """Make ``session.execute`` return a configurable result mock."""
    result = mocker.MagicMock()
    mocker.patch.object(
        mock_session, "execute", mocker.AsyncMock(return_value=result)
    )
    return cast("MockType", result)


@pytest.fixture
def reset_db_manager() -> Generator[None]:
    """Reset the global engine manager around a test."""
    _db_manager.reset()
    yield
    _db_manager.reset()
