"""Follow and unfollow endpoints plus relationship listings."""

from __future__ import annotations

from fastapi import APIRouter

from mingle.api.v1.dependencies import CurrentUserDep, SessionDep
from mingle.models import User
from mingle.schemas.common import ListResponse, MessageResponse
from mingle.schemas.user import UserSummary
from mingle.services import follow_service

router = APIRouter(prefix="/follows", tags=["follows"])


def _summaries(users: list[User]) -> ListResponse[UserSummary]:
    return ListResponse[UserSummary](data=[UserSummary.model_validate(user) for user in users])


@router.post("/{target_user_id}", response_model=MessageResponse)
async def follow(
    target_user_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MessageResponse:
    """Start following a user."""
    follow_service.follow_user(db, current_user, target_user_id)
    return MessageResponse(message="User followed successfully")


@router.delete("/{target_user_id}", response_model=MessageResponse)
async def unfollow(
    target_user_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MessageResponse:
    """Stop following a user."""
    follow_service.unfollow_user(db, current_user, target_user_id)
    return MessageResponse(message="User unfollowed successfully")


@router.get("/{user_id}/followers", response_model=ListResponse[UserSummary])
async def list_followers(user_id: int, db: SessionDep) -> ListResponse[UserSummary]:
    """List the users following ``user_id``."""
    return _summaries(follow_service.list_followers(db, user_id))


@router.get("/{user_id}/following", response_model=ListResponse[UserSummary])
async def list_following(user_id: int, db: SessionDep) -> ListResponse[UserSummary]:
    """List the users ``user_id`` follows."""
    return _summaries(follow_service.list_following(db, user_id))
