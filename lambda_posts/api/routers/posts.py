"""Routes of the posts resource, mounted under ``{api_prefix}/posts``."""

from fastapi import APIRouter

from lambda_posts.api.schemas.entities import PostRead
from lambda_posts.api.schemas.envelopes import PostEnvelope, PostListEnvelope
from lambda_posts.api.utils.responses import error_responses
from lambda_posts.api.validation import ResolvedPost, ValidUpdatePostBody
from lambda_posts.core.exceptions import NotFoundError
from lambda_posts.infrastructure.database.dependencies import PostStore

router = APIRouter(tags=["posts"])


@router.get("", response_model=PostListEnvelope, responses=error_responses(500))
async def list_posts(posts: PostStore) -> PostListEnvelope:
    """Return every post."""
    found = await posts.get()
    return PostListEnvelope(posts=[PostRead.model_validate(post) for post in found])


@router.get(
    "/{post_id}", response_model=PostEnvelope, responses=error_responses(404, 500)
)
async def get_post(post: ResolvedPost) -> PostEnvelope:
    """Return the post resolved from the path."""
    return PostEnvelope(post=PostRead.model_validate(post))


@router.put(
    "/{post_id}",
    response_model=PostEnvelope,
    responses=error_responses(400, 404, 500),
)
async def update_post(
    post: ResolvedPost, body: ValidUpdatePostBody, posts: PostStore
) -> PostEnvelope:
    """Replace the text and author of the post resolved from the path."""
    updated = await posts.update(post.id, {"text": body.text, "user_id": body.user_id})
    if updated is None:
        raise NotFoundError.for_entity("post", post.id)
    return PostEnvelope(post=PostRead.model_validate(updated))


@router.delete(
    "/{post_id}", response_model=PostEnvelope, responses=error_responses(404, 500)
)
async def delete_post(post: ResolvedPost, posts: PostStore) -> PostEnvelope:
    """Delete the post resolved from the path and return it."""
    removed = await posts.remove(post.id)
    if removed is None:
        raise NotFoundError.for_entity("post", post.id)
    return PostEnvelope(post=PostRead.model_validate(removed))
