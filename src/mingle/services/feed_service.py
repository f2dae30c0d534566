"""Query-time feeds: following timeline and explore."""
from __future__ import annotations

import math
from dataclasses import dataclass

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from mingle.models import Follow, Post, PostLike, User

from .post_service import post_query

__all__ = ["ExplorePage", "home_feed", "explore"]


@dataclass(frozen=True)
class ExplorePage:
    """One page of the explore feed with its pagination facts."""

    posts: list[Post]
    total_posts: int
    total_pages: int
    current_page: int

    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.total_pages


def home_feed(db: Session, viewer: User) -> list[Post]:
    """Return posts by the viewer and everyone they follow, newest first."""
    followed_ids = select(Follow.following_id).where(Follow.follower_id == viewer.id)
    return (
        post_query(db)
        .filter(or_(Post.user_id == viewer.id, Post.user_id.in_(followed_ids)))
        .order_by(Post.created_at.desc(), Post.id.desc())
        .all()
    )


def explore(db: Session, viewer: User, page: int = 1, limit: int = 20) -> ExplorePage:
    """Return posts by other users, newest first, then most liked.

    Args:
        db: Database session
        viewer: User whose own posts are excluded
        page: 1-based page number
        limit: Page size

    Returns:
        The requested page and totals for pagination
    """
    like_counts = (
        select(PostLike.post_id, func.count().label("like_count"))
        .group_by(PostLike.post_id)
        .subquery()
    )
    base = post_query(db).filter(Post.user_id != viewer.id)
    total_posts = base.count()

    posts = (
        base.outerjoin(like_counts, like_counts.c.post_id == Post.id)
        .order_by(
            Post.created_at.desc(),
            func.coalesce(like_counts.c.like_count, 0).desc(),
            Post.id.desc(),
        )
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return ExplorePage(
        posts=posts,
        total_posts=total_posts,
        total_pages=math.ceil(total_posts / limit) if limit else 0,
        current_page=page,
    )
