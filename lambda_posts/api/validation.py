"""Request validation chain shared by the users and posts routers.

Each validator is a FastAPI dependency. It either returns a value that the
route handler receives as a typed argument, or raises an application error
that ends the request before the handler runs:

- **Existence validators** (``validate_user_id``, ``validate_post_id``)
  resolve the ``id`` path parameter to a stored entity, raising
  ``NotFoundError`` (404) when the store has no such entity.
- **Shape validators** (``validate_user``, ``validate_post``,
  ``validate_request_body``) require fields to be present *and truthy*
  (``0``, ``""`` and ``false`` count as missing), raising ``ValidationError``
  (400) otherwise. Values are not trimmed, bounded or converted beyond what
  the typed body models accept.

Store failures inside a validator surface as ``StoreError`` (500).

Routes declare existence before shape, so an unknown id answers 404 even
when required fields are missing or falsy. A body that is not valid JSON is
rejected while the request is decoded, before any validator runs, and
answers 400.
"""

from typing import Annotated, Any

from fastapi import Body, Depends, Path
from loguru import logger
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from lambda_posts.api.schemas.bodies import NewPostBody, NewUserBody, UpdatePostBody
from lambda_posts.core.exceptions import NotFoundError, ValidationError
from lambda_posts.infrastructure.database.dependencies import PostStore, UserStore
from lambda_posts.infrastructure.database.models import Post, User

USER_BODY_MESSAGE = "Please provide a name for the user."
POST_BODY_MESSAGE = "Please provide text for the post."
UPDATE_POST_BODY_MESSAGE = "Please provide text and a user id."

UserIdParam = Annotated[str, Path(description="Numeric id of the user")]
PostIdParam = Annotated[str, Path(description="Numeric id of the post")]

# Any JSON value; its shape is checked by require_fields.
RawBodyParam = Annotated[Any, Body()]


def require_fields[B: BaseModel](
    body: Any,  # noqa: ANN401 - raw request body, checked here
    fields: tuple[str, ...],
    schema: type[B],
    message: str,
) -> B:
    """Check that ``fields`` are truthy in ``body`` and build ``schema``.

    Args:
        body: Decoded JSON request body, or None when no body was sent.
        fields: Names of the required fields.
        schema: Typed body model to build from the required fields.
        message: Client message used for every failure.

    Returns:
        B: The validated body.

    Raises:
        ValidationError: If the body is not an object, a field is missing or
            falsy, or a field has a type the schema rejects.
    """
    if not isinstance(body, dict):
        raise ValidationError(message, context={"missing": list(fields)})

    missing = [field for field in fields if not body.get(field)]
    if missing:
        logger.debug("Request body missing fields: {}", missing)
        raise ValidationError(message, context={"missing": missing})

    try:
        return schema.model_validate({field: body[field] for field in fields})
    except PydanticValidationError as exc:
        invalid = [".".join(str(loc) for loc in error["loc"]) for error in exc.errors()]
        raise ValidationError(message, context={"invalid": invalid}, cause=exc) from exc


async def validate_user_id(user_id: UserIdParam, users: UserStore) -> User:
    """Resolve the ``id`` path parameter to a user.

    Raises:
        NotFoundError: If no user has this id.
    """
    user = await users.get_by_id(user_id)
    if user is None:
        raise NotFoundError.for_entity("user", user_id)
    return user


async def validate_post_id(post_id: PostIdParam, posts: PostStore) -> Post:
    """Resolve the ``id`` path parameter to a post.

    Raises:
        NotFoundError: If no post has this id.
    """
    post = await posts.get_by_id(post_id)
    if post is None:
        raise NotFoundError.for_entity("post", post_id)
    return post


def validate_user(body: RawBodyParam = None) -> NewUserBody:
    """Require a truthy ``name``."""
    return require_fields(body, ("name",), NewUserBody, USER_BODY_MESSAGE)


def validate_post(body: RawBodyParam = None) -> NewPostBody:
    """Require a truthy ``text``; the author is taken from the URL."""
    return require_fields(body, ("text",), NewPostBody, POST_BODY_MESSAGE)


def validate_request_body(body: RawBodyParam = None) -> UpdatePostBody:
    """Require a truthy ``text`` and ``user_id``."""
    return require_fields(
        body, ("text", "user_id"), UpdatePostBody, UPDATE_POST_BODY_MESSAGE
    )


ResolvedUser = Annotated[User, Depends(validate_user_id)]
ResolvedPost = Annotated[Post, Depends(validate_post_id)]
ValidUserBody = Annotated[NewUserBody, Depends(validate_user)]
ValidPostBody = Annotated[NewPostBody, Depends(validate_post)]
ValidUpdatePostBody = Annotated[UpdatePostBody, Depends(validate_request_body)]
