"""Routes of the users resource, mounted under ``{api_prefix}/users``."""

from typing import Annotated

from fastapi import APIRouter, Path, status
from loguru import logger

from lambda_posts.api.schemas.entities import PostRead, UserRead
from lambda_posts.api.schemas.envelopes import (
    PostEnvelope,
    PostListEnvelope,
    UserEnvelope,
    UserListEnvelope,
)
from lambda_posts.api.utils.responses import error_responses
from lambda_posts.api.validation import ResolvedUser, ValidPostBody, ValidUserBody
from lambda_posts.core.exceptions import NotFoundError
from lambda_posts.infrastructure.database.dependencies import PostStore, UserStore

router = APIRouter(tags=["users"])


@router.get("", response_model=UserListEnvelope, responses=error_responses(500))
async def list_users(users: UserStore) -> UserListEnvelope:
    """Return every user."""
    found = await users.get()
    return UserListEnvelope(users=[UserRead.model_validate(user) for user in found])


@router.get(
    "/{user_id}", response_model=UserEnvelope, responses=error_responses(404, 500)
)
async def get_user(user: ResolvedUser) -> UserEnvelope:
    """Return the user resolved from the path."""
    return UserEnvelope(user=UserRead.model_validate(user))


@router.get(
    "/{user_id}/posts",
    response_model=PostListEnvelope,
    responses=error_responses(404, 500),
)
async def list_user_posts(user: ResolvedUser, users: UserStore) -> PostListEnvelope:
    """Return every post written by the user resolved from the path."""
    posts = await users.get_user_posts(user.id)
    return PostListEnvelope(posts=[PostRead.model_validate(post) for post in posts])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=UserEnvelope,
    responses=error_responses(400, 500),
)
async def create_user(body: ValidUserBody, users: UserStore) -> UserEnvelope:
    """Create a user from a body carrying a non-empty ``name``."""
    user = await users.insert({"name": body.name})
    return UserEnvelope(user=UserRead.model_validate(user))


@router.post(
    "/{user_id}/posts",
    status_code=status.HTTP_201_CREATED,
    response_model=PostEnvelope,
    responses=error_responses(400, 500),
)
async def create_user_post(
    user_id: Annotated[str, Path(description="Id of the author")],
    body: ValidPostBody,
    posts: PostStore,
) -> PostEnvelope:
    """Create a post authored by the user id in the path.

    The author is not looked up first; a user id the store cannot accept
    fails as a store error.
    """
    post = await posts.insert({"text": body.text, "user_id": user_id})
    logger.debug("Post {} created for user {}", post.id, user_id)
    return PostEnvelope(post=PostRead.model_validate(post))


@router.put(
    "/{user_id}",
    response_model=UserEnvelope,
    responses=error_responses(400, 404, 500),
)
async def update_user(
    user: ResolvedUser, body: ValidUserBody, users: UserStore
) -> UserEnvelope:
    """Rename the user resolved from the path."""
    updated = await users.update(user.id, {"name": body.name})
    if updated is None:
        raise NotFoundError.for_entity("user", user.id)
    return UserEnvelope(user=UserRead.model_validate(updated))


@router.delete(
    "/{user_id}", response_model=UserEnvelope, responses=error_responses(404, 500)
)
async def delete_user(user: ResolvedUser, users: UserStore) -> UserEnvelope:
    """Delete the user resolved from the path and return it."""
    removed = await users.remove(user.id)
    if removed is None:
        raise NotFoundError.for_entity("user", user.id)
    return UserEnvelope(user=UserRead.model_validate(removed))
