"""Response envelopes shared by every endpoint.

Every response body is a JSON object with a boolean ``success`` field.
Successful responses carry the payload under a key named after the resource
(``user``, ``users``, ``post``, ``posts``); failures carry a ``message``.
"""

from typing import Literal

from pydantic import BaseModel, Field

from lambda_posts.api.schemas.entities import PostRead, UserRead


class UserEnvelope(BaseModel):
    """Envelope around a single user."""

    success: Literal[True] = True
    user: UserRead


class UserListEnvelope(BaseModel):
    """Envelope around every user."""

    success: Literal[True] = True
    users: list[UserRead]


class PostEnvelope(BaseModel):
    """Envelope around a single post."""

    success: Literal[True] = True
    post: PostRead


class PostListEnvelope(BaseModel):
    """Envelope around a list of posts."""

    success: Literal[True] = True
    posts: list[PostRead]


class ErrorEnvelope(BaseModel):
    """Envelope for every failed request."""

    success: Literal[False] = False
    message: str = Field(
        ...,
        description="Human-readable reason for the failure",
        examples=[
            "Could not find a user by that id.",
            "Please provide a name for the user.",
        ],
    )
