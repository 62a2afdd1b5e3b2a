"""Typed request bodies produced by the shape validators.

Routes never read the raw JSON: the validators in ``lambda_posts.api.validation``
check that the required fields are present and truthy and then build one of
these models.
"""

from pydantic import BaseModel, Field, field_validator


class NewUserBody(BaseModel):
    """Body of ``POST /users`` and ``PUT /users/{id}``."""

    name: str = Field(
        ...,
        description="Display name of the user",
        examples=["Frodo Baggins"],
    )


class NewPostBody(BaseModel):
    """Body of ``POST /users/{id}/posts``; the author comes from the URL."""

    text: str = Field(
        ...,
        description="Content of the post",
        examples=["I wish the ring had never come to me."],
    )


class UpdatePostBody(BaseModel):
    """Body of ``PUT /posts/{id}``."""

    text: str = Field(
        ...,
        description="New content of the post",
        examples=["Our business is our own."],
    )
    user_id: int = Field(
        ...,
        description="Id of the user the post belongs to",
        examples=[1],
    )

    @field_validator("user_id", mode="before")
    @classmethod
    def reject_boolean_user_id(cls, v: object) -> object:
        """Refuse JSON booleans, which lax int parsing would turn into 0 or 1."""
        if isinstance(v, bool):
            msg = "user_id must be a number, not a boolean"
            raise ValueError(msg)  # noqa: TRY004 - reported as a validation error
        return v
