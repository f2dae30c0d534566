# src/mingle/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    comments_router,
    feed_router,
    follows_router,
    posts_router,
    profiles_router,
    search_router,
    users_router,
)

__all__ = [
    "users_router",
    "profiles_router",
    "posts_router",
    "comments_router",
    "follows_router",
    "feed_router",
    "search_router",
]
