"""Base repository pattern implementation for database operations.

This module provides a generic repository that implements the CRUD
operations every resource exposes (``get``, ``get_by_id``, ``insert``,
``update``, ``remove``) for SQLAlchemy models using async sessions.

Ids arrive from URLs as raw strings. They are coerced here; an id that can
never match a row (non-numeric, out of range) simply finds nothing. Any
error raised by SQLAlchemy or the driver is re-raised as ``StoreError``.
"""

from collections.abc import AsyncGenerator, Mapping
from contextlib import asynccontextmanager
from typing import Any, Final

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from lambda_posts.core.exceptions import StoreError
from lambda_posts.infrastructure.database.base import BaseModel

# Range of the BigInteger primary key columns
MIN_ID: Final[int] = -(2**63)
MAX_ID: Final[int] = 2**63 - 1


def coerce_id(raw_id: int | str) -> int | None:
    """Convert a raw id to an integer primary key value.

    Args:
        raw_id: Id as an integer or as the string taken from a URL.

    Returns:
        int | None: The integer id, or None if no row could have this id.
    """
    if isinstance(raw_id, bool):
        return None
    try:
        value = int(raw_id)
    except (TypeError, ValueError):
        return None
    if not MIN_ID <= value <= MAX_ID:
        return None
    return value


class BaseRepository[T: BaseModel]:
    """Base repository class providing the CRUD operations of a resource.

    Args:
        session: The async SQLAlchemy session to use for operations.
        model_class: The SQLAlchemy model class this repository manages.
        entity_name: Singular resource name used in error messages.

    Example:
        class PostRepository(BaseRepository[Post]):
            def __init__(self, session: AsyncSession) -> None:
                super().__init__(session, Post, "post")
    """

    def __init__(
        self, session: AsyncSession, model_class: type[T], entity_name: str
    ) -> None:
        self.session = session
        self.model_class = model_class
        self.entity_name = entity_name
        logger.debug("Initialized repository for {}", model_class.__name__)

    @asynccontextmanager
    async def _store_operation(self, action: str) -> AsyncGenerator[None]:
        """Translate storage errors raised inside the block into StoreError.

        Args:
            action: What was being attempted, e.g. ``"remove post"``.

        Raises:
            StoreError: If SQLAlchemy or the driver raised an error.
        """
        try:
            yield
        except SQLAlchemyError as exc:
            logger.error(
                "Store operation failed: {} ({})",
                action,
                type(exc).__name__,
                model=self.model_class.__name__,
            )
            raise StoreError(
                f"Could not {action}.",
                context={"model": self.model_class.__name__, "action": action},
                cause=exc,
            ) from exc

    def _normalize(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Prepare incoming field values before they reach the model.

        Subclasses override this to coerce foreign keys.

        Args:
            data: Field values to write.

        Returns:
            dict[str, Any]: Values ready to be set on the model.
        """
        return dict(data)

    async def get(self) -> list[T]:
        """Retrieve every instance, ordered by id.

        Returns:
            list[T]: List of model instances.
        """
        logger.debug("Fetching all {}", self.model_class.__name__)

        async with self._store_operation(f"retrieve {self.entity_name}s"):
            stmt = select(self.model_class).order_by(self.model_class.id)
            result = await self.session.execute(stmt)
            instances = list(result.scalars().all())

        logger.debug(
            "Retrieved {} {} instances", len(instances), self.model_class.__name__
        )
        return instances

    async def get_by_id(self, entity_id: int | str) -> T | None:
        """Retrieve a model instance by its ID.

        Args:
            entity_id: The primary key, possibly as a raw string.

        Returns:
            T | None: The model instance if found, None otherwise.
        """
        logger.debug("Fetching {} by ID: {}", self.model_class.__name__, entity_id)

        key = coerce_id(entity_id)
        if key is None:
            logger.debug(
                "{} ID {!r} cannot match any row", self.model_class.__name__, entity_id
            )
            return None

        async with self._store_operation(f"retrieve {self.entity_name}"):
            stmt = select(self.model_class).where(self.model_class.id == key)
            result = await self.session.execute(stmt)
            instance = result.scalar_one_or_none()

        if instance is None:
            logger.debug(
                "{} instance not found with ID: {}", self.model_class.__name__, key
            )
        return instance

    async def insert(self, data: Mapping[str, Any]) -> T:
        """Create a new row and return it with its assigned id.

        Args:
            data: Field values for the new instance.

        Returns:
            T: The created model instance with populated ID and timestamps.
        """
        logger.debug("Creating new {} instance", self.model_class.__name__)

        async with self._store_operation(f"add {self.entity_name}"):
            instance = self.model_class(**self._normalize(data))
            self.session.add(instance)
            await self.session.flush()
            await self.session.refresh(instance)

        logger.info(
            "Created {} instance with ID: {}", self.model_class.__name__, instance.id
        )
        return instance

    async def update(self, entity_id: int | str, data: Mapping[str, Any]) -> T | None:
        """Update a model instance by its ID.

        Args:
            entity_id: The primary key of the instance to update.
            data: Fields to update.

        Returns:
            T | None: The updated model instance if found, None otherwise.
        """
        instance = await self.get_by_id(entity_id)
        if instance is None:
            return None

        values = self._normalize(data)
        async with self._store_operation(f"update {self.entity_name}"):
            for key, value in values.items():
                if hasattr(instance, key):
                    setattr(instance, key, value)
                else:
                    logger.warning(
                        "Attempted to update non-existent field '{}' on {}",
                        key,
                        self.model_class.__name__,
                    )
            await self.session.flush()
            await self.session.refresh(instance)

        logger.info(
            "Updated {} instance ID {} - fields: {}",
            self.model_class.__name__,
            instance.id,
            list(values.keys()),
        )
        return instance

    async def remove(self, entity_id: int | str) -> T | None:
        """Delete a model instance by its ID.

        Args:
            entity_id: The primary key of the instance to delete.

        Returns:
            T | None: The deleted instance if it existed, None otherwise.
        """
        instance = await self.get_by_id(entity_id)
        if instance is None:
            return None

        async with self._store_operation(f"remove {self.entity_name}"):
            await self.session.delete(instance)
            await self.session.flush()

        logger.info(
            "Deleted {} instance with ID: {}", self.model_class.__name__, instance.id
        )
        return instance
