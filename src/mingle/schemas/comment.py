"""Comment-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .user import UserSummary


class CommentCreate(BaseModel):
    """Schema for adding a comment to a post."""

    post_id: int = Field(..., description="Post being commented on")
    text: str = Field(..., min_length=1, max_length=5000, description="Comment body")


class CommentUpdate(BaseModel):
    """Schema for editing a comment."""

    text: str = Field(..., min_length=1, max_length=5000, description="Comment body")


class CommentResponse(BaseModel):
    """Schema for comment information returned by the API."""

    id: int
    post_id: int
    author: UserSummary
    text: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
