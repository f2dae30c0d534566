"""Post-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .user import UserSummary


class PostResponse(BaseModel):
    """Schema for post information returned by the API.

    The author reference is expanded with the author's profile summary.
    """

    id: int
    author: UserSummary
    description: str | None = None
    location: str | None = None
    image: str | None = None
    likes: list[int] = Field(default_factory=list, validation_alias="liker_ids")
    likes_count: int = 0
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class LikeResponse(BaseModel):
    """Result of a like or unlike."""

    message: str
    likes_count: int
