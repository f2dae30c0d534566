# src/mingle/models/__init__.py
"""SQLAlchemy models for the Mingle application."""

from .comment import Comment
from .follow import Follow
from .post import Post, PostLike
from .user import ProfileDetails, User

__all__ = [
    "Comment",
    "Follow",
    "Post", "PostLike",
    "ProfileDetails", "User",
]
