"""Database models for users and their posts."""

from sqlalchemy import BigInteger, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from lambda_posts.infrastructure.database.base import BaseModel

USER_NAME_MAX_LENGTH = 128


class User(BaseModel):
    """A person who writes posts."""

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(
        String(USER_NAME_MAX_LENGTH), unique=True, nullable=False
    )


class Post(BaseModel):
    """A piece of text written by a user.

    Posts are removed together with their author.
    """

    __tablename__ = "posts"

    text: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("users.id", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
        index=True,
    )
