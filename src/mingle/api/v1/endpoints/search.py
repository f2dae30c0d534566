"""Search endpoints for users and posts."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query

from mingle.api.v1.dependencies import SessionDep
from mingle.schemas.common import ListResponse
from mingle.schemas.post import PostResponse
from mingle.schemas.user import UserSummary
from mingle.services import search_service

router = APIRouter(prefix="/search", tags=["search"])

SearchQuery = Annotated[str | None, Query(description="Case-insensitive substring")]


@router.get("/users", response_model=ListResponse[UserSummary])
async def search_users(db: SessionDep, query: SearchQuery = None) -> ListResponse[UserSummary]:
    """Find users by username, profile full name or profile username."""
    return ListResponse[UserSummary](data=search_service.search_users(db, query))


@router.get("/posts", response_model=ListResponse[PostResponse])
async def search_posts(db: SessionDep, query: SearchQuery = None) -> ListResponse[PostResponse]:
    """Find posts by description or location."""
    posts = search_service.search_posts(db, query)
    return ListResponse[PostResponse](data=[PostResponse.model_validate(post) for post in posts])
