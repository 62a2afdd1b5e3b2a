"""Pydantic schema models for request bodies and response envelopes."""

from lambda_posts.api.schemas.bodies import NewPostBody, NewUserBody, UpdatePostBody
from lambda_posts.api.schemas.entities import PostRead, UserRead
from lambda_posts.api.schemas.envelopes import (
    ErrorEnvelope,
    PostEnvelope,
    PostListEnvelope,
    UserEnvelope,
    UserListEnvelope,
)

__all__ = [
    "ErrorEnvelope",
    "NewPostBody",
    "NewUserBody",
    "PostEnvelope",
    "PostListEnvelope",
    "PostRead",
    "UpdatePostBody",
    "UserEnvelope",
    "UserListEnvelope",
    "UserRead",
]
