"""Follow relationships between users.

A ``Follow`` row is the only stored record of a relationship. ``User.following``
and ``User.followers`` are derived from it, so creating or deleting the row
updates the edge and both memberships in the same commit.
"""
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from mingle.core.exceptions import (
    ConflictError,
    InvalidStateError,
    ValidationFailedError,
)
from mingle.models import Follow, User

from .user_service import get_user_or_404

logger = logging.getLogger(__name__)

__all__ = [
    "is_following",
    "follow_user",
    "unfollow_user",
    "list_followers",
    "list_following",
]


def _get_edge(db: Session, follower_id: int, following_id: int) -> Follow | None:
    return db.query(Follow).filter(
        Follow.follower_id == follower_id,
        Follow.following_id == following_id,
    ).first()


def is_following(db: Session, follower_id: int, following_id: int) -> bool:
    """Return True if ``follower_id`` currently follows ``following_id``."""
    return _get_edge(db, follower_id, following_id) is not None


def follow_user(db: Session, follower: User, target_user_id: int) -> Follow:
    """Move the pair (follower, target) from NotFollowing to Following.

    Raises:
        ValidationFailedError: If the caller targets themselves.
        NotFoundError: If the target user does not exist.
        ConflictError: If the edge already exists.
    """
    if target_user_id == follower.id:
        raise ValidationFailedError("You cannot follow yourself")

    target = get_user_or_404(db, target_user_id)
    if is_following(db, follower.id, target.id):
        raise ConflictError("Already following this user")

    edge = Follow(follower_id=follower.id, following_id=target.id)
    db.add(edge)
    try:
        db.commit()
    except IntegrityError as err:
        db.rollback()
        # A concurrent request created the same edge after our check.
        raise ConflictError("Already following this user") from err

    logger.info("User %s followed user %s", follower.id, target.id)
    return edge


def unfollow_user(db: Session, follower: User, target_user_id: int) -> None:
    """Move the pair (follower, target) from Following to NotFollowing.

    Raises:
        ValidationFailedError: If the caller targets themselves.
        NotFoundError: If the target user does not exist.
        InvalidStateError: If there is no edge to remove.
    """
    if target_user_id == follower.id:
        raise ValidationFailedError("You cannot unfollow yourself")

    target = get_user_or_404(db, target_user_id)
    edge = _get_edge(db, follower.id, target.id)
    if edge is None:
        raise InvalidStateError("Not following this user")

    db.delete(edge)
    db.commit()
    logger.info("User %s unfollowed user %s", follower.id, target.id)


def list_followers(db: Session, user_id: int) -> list[User]:
    """Return the users following ``user_id``, oldest edge first."""
    return list(get_user_or_404(db, user_id).followers)


def list_following(db: Session, user_id: int) -> list[User]:
    """Return the users ``user_id`` follows, oldest edge first."""
    return list(get_user_or_404(db, user_id).following)
