"""Public representations of stored entities."""

from pydantic import BaseModel, ConfigDict, Field


class UserRead(BaseModel):
    """A user as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Id assigned by the store", examples=[11])
    name: str = Field(..., description="Display name", examples=["Dave Vazquez"])


class PostRead(BaseModel):
    """A post as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Id assigned by the store", examples=[1])
    text: str = Field(
        ...,
        description="Content of the post",
        examples=["I think we should get off the road. Get off the road! Quick!"],
    )
    user_id: int = Field(..., description="Id of the author", examples=[1])
