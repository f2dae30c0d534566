# src/mingle/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .comments import router as comments_router
from .feed import router as feed_router
from .follows import router as follows_router
from .posts import router as posts_router
from .profiles import router as profiles_router
from .search import router as search_router
from .users import router as users_router

__all__ = [
    "users_router",
    "profiles_router",
    "posts_router",
    "comments_router",
    "follows_router",
    "feed_router",
    "search_router",
]
