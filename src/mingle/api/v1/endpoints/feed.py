"""Home feed and explore endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query

from mingle.api.v1.dependencies import CurrentUserDep, SessionDep, SettingsDep
from mingle.schemas.common import ListResponse
from mingle.schemas.feed import ExploreResponse, Pagination
from mingle.schemas.post import PostResponse
from mingle.services import feed_service

router = APIRouter(prefix="/feed", tags=["feed"])


@router.get("", response_model=ListResponse[PostResponse])
async def home_feed(current_user: CurrentUserDep, db: SessionDep) -> ListResponse[PostResponse]:
    """Posts by the caller and the users they follow, newest first."""
    posts = feed_service.home_feed(db, current_user)
    return ListResponse[PostResponse](data=[PostResponse.model_validate(post) for post in posts])


@router.get("/explore", response_model=ExploreResponse)
async def explore(
    current_user: CurrentUserDep,
    db: SessionDep,
    settings: SettingsDep,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int | None, Query(ge=1)] = None,
) -> ExploreResponse:
    """Paginated posts by other users, newest and most liked first."""
    size = min(limit or settings.explore_default_limit, settings.explore_max_limit)
    result = feed_service.explore(db, current_user, page=page, limit=size)
    return ExploreResponse(
        data=[PostResponse.model_validate(post) for post in result.posts],
        pagination=Pagination(
            total_posts=result.total_posts,
            total_pages=result.total_pages,
            current_page=result.current_page,
            has_next_page=result.has_next_page,
        ),
    )
