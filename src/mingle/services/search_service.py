"""Case-insensitive substring search over users and posts."""
from __future__ import annotations

from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from mingle.core.exceptions import ValidationFailedError
from mingle.models import Post, ProfileDetails, User
from mingle.schemas.profile import ProfileSummary
from mingle.schemas.user import UserSummary

from .post_service import post_query

__all__ = ["search_users", "search_posts"]

_LIKE_ESCAPE = "\\"


def _contains_pattern(query: str | None) -> str:
    """Return a LIKE pattern matching ``query`` literally anywhere in a value.

    Raises:
        ValidationFailedError: If the query is missing or blank.
    """
    if query is None or not query.strip():
        raise ValidationFailedError("Search query is required")
    escaped = (
        query.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", f"{_LIKE_ESCAPE}%")
        .replace("_", f"{_LIKE_ESCAPE}_")
    )
    return f"%{escaped}%"


def search_users(db: Session, query: str | None) -> list[UserSummary]:
    """Find users by username, then by profile full name or profile username.

    Results are de-duplicated by user id; username matches come first.
    """
    pattern = _contains_pattern(query)

    by_username = (
        db.query(User)
        .options(selectinload(User.profile))
        .filter(User.username.ilike(pattern, escape=_LIKE_ESCAPE))
        .order_by(User.id)
        .all()
    )
    by_profile = (
        db.query(ProfileDetails)
        .options(selectinload(ProfileDetails.user))
        .filter(
            or_(
                ProfileDetails.full_name.ilike(pattern, escape=_LIKE_ESCAPE),
                ProfileDetails.username.ilike(pattern, escape=_LIKE_ESCAPE),
            )
        )
        .order_by(ProfileDetails.id)
        .all()
    )

    results = [UserSummary.model_validate(user) for user in by_username]
    seen = {user.id for user in by_username}
    for profile in by_profile:
        if profile.user_id in seen:
            continue
        seen.add(profile.user_id)
        results.append(
            UserSummary(
                id=profile.user_id,
                username=profile.user.username,
                profile=ProfileSummary.model_validate(profile),
            )
        )
    return results


def search_posts(db: Session, query: str | None) -> list[Post]:
    """Find posts whose description or location contains the query, newest first."""
    pattern = _contains_pattern(query)
    return (
        post_query(db)
        .filter(
            or_(
                Post.description.ilike(pattern, escape=_LIKE_ESCAPE),
                Post.location.ilike(pattern, escape=_LIKE_ESCAPE),
            )
        )
        .order_by(Post.created_at.desc(), Post.id.desc())
        .all()
    )
