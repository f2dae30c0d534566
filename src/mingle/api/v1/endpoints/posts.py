"""Post-related endpoints for the Mingle API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, File, Form, UploadFile, status

from mingle.api.v1.dependencies import (
    CurrentUserDep,
    ImageStoresDep,
    OptionalUserDep,
    SessionDep,
    SettingsDep,
)
from mingle.models import Post
from mingle.schemas.common import ListResponse, MessageResponse
from mingle.schemas.post import LikeResponse, PostResponse
from mingle.services import post_service

router = APIRouter(prefix="/posts", tags=["posts"])

FormText = Annotated[str | None, Form()]


def _render(posts: list[Post]) -> ListResponse[PostResponse]:
    return ListResponse[PostResponse](data=[PostResponse.model_validate(post) for post in posts])


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    current_user: CurrentUserDep,
    db: SessionDep,
    stores: ImageStoresDep,
    description: FormText = None,
    location: FormText = None,
    image: Annotated[UploadFile | None, File()] = None,
) -> PostResponse:
    """Create a post with an optional image."""
    post = await post_service.create_post(
        db,
        current_user,
        stores.posts,
        description=description,
        location=location,
        image=image,
    )
    return PostResponse.model_validate(post)


@router.post(
    "/multi",
    response_model=ListResponse[PostResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_multiple_posts(
    current_user: CurrentUserDep,
    db: SessionDep,
    stores: ImageStoresDep,
    settings: SettingsDep,
    description: FormText = None,
    location: FormText = None,
    images: Annotated[list[UploadFile] | None, File()] = None,
) -> ListResponse[PostResponse]:
    """Create one post per uploaded image."""
    posts = await post_service.create_posts(
        db,
        current_user,
        stores.posts,
        images or [],
        description=description,
        location=location,
        max_files=settings.multi_post_max_files,
    )
    return _render(posts)


@router.get("", response_model=ListResponse[PostResponse])
async def list_posts(db: SessionDep, viewer: OptionalUserDep) -> ListResponse[PostResponse]:
    """List every post, newest first."""
    return _render(post_service.list_posts(db))


@router.get("/me", response_model=ListResponse[PostResponse])
async def list_my_posts(
    current_user: CurrentUserDep,
    db: SessionDep,
) -> ListResponse[PostResponse]:
    """List the caller's posts, newest first."""
    return _render(post_service.list_user_posts(db, current_user.id))


@router.get("/user/{user_id}", response_model=ListResponse[PostResponse])
async def list_user_posts(
    user_id: int,
    db: SessionDep,
    viewer: OptionalUserDep,
) -> ListResponse[PostResponse]:
    """List the posts of one user, newest first."""
    return _render(post_service.list_user_posts(db, user_id))


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: int, db: SessionDep, viewer: OptionalUserDep) -> PostResponse:
    """Return one post with its author expanded."""
    return PostResponse.model_validate(post_service.get_post_or_404(db, post_id))


@router.put("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
    stores: ImageStoresDep,
    description: FormText = None,
    location: FormText = None,
    image: Annotated[UploadFile | None, File()] = None,
) -> PostResponse:
    """Update a post the caller owns."""
    post = await post_service.update_post(
        db,
        current_user,
        post_id,
        stores.posts,
        description=description,
        location=location,
        image=image,
    )
    return PostResponse.model_validate(post)


@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(
    post_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
    stores: ImageStoresDep,
) -> MessageResponse:
    """Delete a post the caller owns, with its comments and likes."""
    post_service.delete_post(db, current_user, post_id, stores.posts)
    return MessageResponse(message="Post deleted successfully")


@router.post("/{post_id}/like", response_model=LikeResponse)
async def like_post(post_id: int, current_user: CurrentUserDep, db: SessionDep) -> LikeResponse:
    """Like a post."""
    count = post_service.like_post(db, current_user, post_id)
    return LikeResponse(message="Post liked successfully", likes_count=count)


@router.post("/{post_id}/unlike", response_model=LikeResponse)
async def unlike_post(post_id: int, current_user: CurrentUserDep, db: SessionDep) -> LikeResponse:
    """Withdraw a like."""
    count = post_service.unlike_post(db, current_user, post_id)
    return LikeResponse(message="Post unliked successfully", likes_count=count)
