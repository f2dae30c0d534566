"""Comments on posts and the rules for who may change them."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Query, Session, selectinload

from mingle.core.exceptions import ForbiddenError, NotFoundError
from mingle.models import Comment, Post, User

logger = logging.getLogger(__name__)

__all__ = [
    "can_edit_comment",
    "can_delete_comment",
    "get_comment_or_404",
    "list_comments",
    "add_comment",
    "update_comment",
    "delete_comment",
]


def can_edit_comment(actor_id: int, comment: Comment) -> bool:
    """Only the author may edit a comment."""
    return comment.user_id == actor_id


def can_delete_comment(actor_id: int, comment: Comment, post: Post | None) -> bool:
    """The author may delete a comment, and so may the owner of its post.

    ``post`` is the comment's parent; ``None`` means it could not be found,
    which leaves only the author with the right to delete.
    """
    if comment.user_id == actor_id:
        return True
    return post is not None and post.user_id == actor_id


def _comment_query(db: Session) -> Query[Comment]:
    return db.query(Comment).options(selectinload(Comment.author).selectinload(User.profile))


def get_comment_or_404(db: Session, comment_id: int) -> Comment:
    """Return a comment with its author expanded, or raise ``NotFoundError``."""
    comment = _comment_query(db).filter(Comment.id == comment_id).first()
    if comment is None:
        raise NotFoundError("Comment not found")
    return comment


def list_comments(db: Session, post_id: int) -> list[Comment]:
    """Return the comments on a post, newest first."""
    return (
        _comment_query(db)
        .filter(Comment.post_id == post_id)
        .order_by(Comment.created_at.desc(), Comment.id.desc())
        .all()
    )


def add_comment(db: Session, author: User, post_id: int, text: str) -> Comment:
    """Attach a comment to an existing post.

    Raises:
        NotFoundError: If the post does not exist.
    """
    if db.get(Post, post_id) is None:
        raise NotFoundError("Post not found")

    comment = Comment(post_id=post_id, user_id=author.id, text=text)
    db.add(comment)
    db.commit()
    return get_comment_or_404(db, comment.id)


def update_comment(db: Session, actor: User, comment_id: int, text: str) -> Comment:
    """Replace the text of a comment the actor wrote.

    Raises:
        NotFoundError: If the comment does not exist.
        ForbiddenError: If the actor is not the author.
    """
    comment = get_comment_or_404(db, comment_id)
    if not can_edit_comment(actor.id, comment):
        raise ForbiddenError("Not authorized to update this comment")

    comment.text = text
    db.commit()
    return get_comment_or_404(db, comment_id)


def delete_comment(db: Session, actor: User, comment_id: int) -> None:
    """Delete a comment as its author or as the owner of its post.

    The parent post is only fetched when the actor is not the author.

    Raises:
        NotFoundError: If the comment does not exist.
        ForbiddenError: If the actor is neither author nor post owner.
    """
    comment = db.get(Comment, comment_id)
    if comment is None:
        raise NotFoundError("Comment not found")

    post = None if comment.user_id == actor.id else db.get(Post, comment.post_id)
    if not can_delete_comment(actor.id, comment, post):
        raise ForbiddenError("Not authorized to delete this comment")

    post_id = comment.post_id
    db.delete(comment)
    db.commit()
    logger.info("User %s deleted comment %s on post %s", actor.id, comment_id, post_id)
