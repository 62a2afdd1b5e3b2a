"""Database access with async SQLAlchemy and the repository pattern.

Core components:
- **base**: Declarative base and common model fields
- **models**: ``User`` and ``Post`` tables
- **repository**: Generic CRUD repository with store-error translation
- **repositories**: ``UserRepository`` and ``PostRepository``
- **session**: Async engine and session management
- **dependencies**: FastAPI dependency injection helpers
"""

from lambda_posts.infrastructure.database.base import Base, BaseModel
from lambda_posts.infrastructure.database.models import Post, User
from lambda_posts.infrastructure.database.repositories import (
    PostRepository,
    UserRepository,
)
from lambda_posts.infrastructure.database.repository import BaseRepository
from lambda_posts.infrastructure.database.session import (
    check_database_connection,
    close_database,
    create_tables,
    get_async_session,
    get_engine,
)

__all__ = [
    "Base",
    "BaseModel",
    "BaseRepository",
    "Post",
    "PostRepository",
    "User",
    "UserRepository",
    "check_database_connection",
    "close_database",
    "create_tables",
    "get_async_session",
    "get_engine",
]
