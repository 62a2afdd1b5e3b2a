"""FastAPI dependency injection for sessions and repositories.

Route handlers never build repositories themselves: they declare
``UserStore`` or ``PostStore`` and receive a repository bound to the
request's session. Tests replace ``get_user_repository`` and
``get_post_repository`` through ``app.dependency_overrides``.
"""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from lambda_posts.infrastructure.database.repositories import (
    PostRepository,
    UserRepository,
)
from lambda_posts.infrastructure.database.session import get_async_session


async def get_db() -> AsyncGenerator[AsyncSession]:
    """Provide a database session for the duration of a request.

    Yields:
        AsyncSession: Session committed on success, rolled back on error.
    """
    async with get_async_session() as session:
        logger.debug("Providing database session for request")
        yield session


DatabaseSession = Annotated[AsyncSession, Depends(get_db)]


def get_user_repository(session: DatabaseSession) -> UserRepository:
    """Build the user repository for the current request."""
    return UserRepository(session)


def get_post_repository(session: DatabaseSession) -> PostRepository:
    """Build the post repository for the current request."""
    return PostRepository(session)


UserStore = Annotated[UserRepository, Depends(get_user_repository)]
PostStore = Annotated[PostRepository, Depends(get_post_repository)]
