"""Comment endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from mingle.api.v1.dependencies import CurrentUserDep, OptionalUserDep, SessionDep
from mingle.schemas.comment import CommentCreate, CommentResponse, CommentUpdate
from mingle.schemas.common import ListResponse, MessageResponse
from mingle.services import comment_service

router = APIRouter(prefix="/comments", tags=["comments"])


@router.post("", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def add_comment(
    payload: CommentCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> CommentResponse:
    """Comment on a post."""
    comment = comment_service.add_comment(db, current_user, payload.post_id, payload.text)
    return CommentResponse.model_validate(comment)


@router.get("/post/{post_id}", response_model=ListResponse[CommentResponse])
async def list_comments(
    post_id: int,
    db: SessionDep,
    viewer: OptionalUserDep,
) -> ListResponse[CommentResponse]:
    """List a post's comments, newest first."""
    comments = comment_service.list_comments(db, post_id)
    return ListResponse[CommentResponse](
        data=[CommentResponse.model_validate(comment) for comment in comments]
    )


@router.put("/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: int,
    payload: CommentUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> CommentResponse:
    """Edit a comment the caller wrote."""
    comment = comment_service.update_comment(db, current_user, comment_id, payload.text)
    return CommentResponse.model_validate(comment)


@router.delete("/{comment_id}", response_model=MessageResponse)
async def delete_comment(
    comment_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MessageResponse:
    """Delete a comment as its author or as the owner of the post."""
    comment_service.delete_comment(db, current_user, comment_id)
    return MessageResponse(message="Comment deleted successfully")
