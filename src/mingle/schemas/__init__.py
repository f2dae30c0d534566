# src/mingle/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .comment import CommentCreate, CommentResponse, CommentUpdate
from .common import ListResponse, MessageResponse
from .feed import ExploreResponse, Pagination
from .post import LikeResponse, PostResponse
from .profile import ProfileFields, ProfileResponse, ProfileSummary
from .user import (
    AuthResponse,
    FollowRef,
    MeResponse,
    SigninRequest,
    SignupRequest,
    UserResponse,
    UserSummary,
    UserWithProfileResponse,
)

__all__ = [
    "CommentCreate", "CommentResponse", "CommentUpdate",
    "ListResponse", "MessageResponse",
    "ExploreResponse", "Pagination",
    "LikeResponse", "PostResponse",
    "ProfileFields", "ProfileResponse", "ProfileSummary",
    "AuthResponse", "FollowRef", "MeResponse", "SigninRequest", "SignupRequest",
    "UserResponse", "UserSummary", "UserWithProfileResponse",
]
