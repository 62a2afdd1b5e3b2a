"""Concrete repositories for users and posts."""

from collections.abc import Mapping
from typing import Any

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lambda_posts.core.exceptions import StoreError
from lambda_posts.infrastructure.database.models import Post, User
from lambda_posts.infrastructure.database.repository import BaseRepository, coerce_id


class UserRepository(BaseRepository[User]):
    """Data access for users."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, User, "user")

    async def get_user_posts(self, user_id: int | str) -> list[Post]:
        """Retrieve the posts written by a user, ordered by id.

        Args:
            user_id: Id of the author.

        Returns:
            list[Post]: The user's posts, empty if there are none.
        """
        key = coerce_id(user_id)
        if key is None:
            return []

        async with self._store_operation("retrieve user posts"):
            stmt = select(Post).where(Post.user_id == key).order_by(Post.id)
            result = await self.session.execute(stmt)
            posts = list(result.scalars().all())

        logger.debug("Retrieved {} posts for user {}", len(posts), key)
        return posts


class PostRepository(BaseRepository[Post]):
    """Data access for posts."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Post, "post")

    def _normalize(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Coerce ``user_id`` to the integer the foreign key column stores.

        Raises:
            StoreError: If ``user_id`` cannot reference any user.
        """
        values = dict(data)
        if "user_id" in values:
            user_id = coerce_id(values["user_id"])
            if user_id is None:
                raise StoreError(
                    "Could not save post: invalid user id.",
                    context={"user_id": str(values["user_id"])},
                )
            values["user_id"] = user_id
        return values
