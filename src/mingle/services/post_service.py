"""Service-level helpers for posts and likes."""
from __future__ import annotations

import logging

from fastapi import UploadFile
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session, selectinload

from mingle.core.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    ValidationFailedError,
)
from mingle.models import Comment, Post, PostLike, User

from .storage import ImageStore

logger = logging.getLogger(__name__)

__all__ = [
    "post_query",
    "get_post_or_404",
    "list_posts",
    "list_user_posts",
    "create_post",
    "create_posts",
    "update_post",
    "delete_post",
    "like_post",
    "unlike_post",
]


def post_query(db: Session) -> Query[Post]:
    """Return a query for posts with author, author profile and likes loaded."""
    return db.query(Post).options(
        selectinload(Post.author).selectinload(User.profile),
        selectinload(Post.likes),
    )


def _newest_first(query: Query[Post]) -> Query[Post]:
    return query.order_by(Post.created_at.desc(), Post.id.desc())


def get_post_or_404(db: Session, post_id: int) -> Post:
    """Return a post with its expansions loaded, or raise ``NotFoundError``."""
    post = post_query(db).filter(Post.id == post_id).first()
    if post is None:
        raise NotFoundError("Post not found")
    return post


def list_posts(db: Session) -> list[Post]:
    """Return every post, newest first."""
    return _newest_first(post_query(db)).all()


def list_user_posts(db: Session, user_id: int) -> list[Post]:
    """Return the posts authored by ``user_id``, newest first."""
    return _newest_first(post_query(db).filter(Post.user_id == user_id)).all()


async def create_post(
    db: Session,
    author: User,
    images: ImageStore,
    *,
    description: str | None = None,
    location: str | None = None,
    image: UploadFile | None = None,
) -> Post:
    """Persist a new post, storing its image first when one is uploaded."""
    filename = await images.save(image) if image is not None else None
    post = Post(
        user_id=author.id,
        description=description,
        location=location,
        image=filename,
    )
    db.add(post)
    try:
        db.commit()
    except Exception:
        db.rollback()
        images.remove(filename)
        raise
    return get_post_or_404(db, post.id)


async def create_posts(
    db: Session,
    author: User,
    images: ImageStore,
    uploads: list[UploadFile],
    *,
    description: str | None = None,
    location: str | None = None,
    max_files: int = 10,
) -> list[Post]:
    """Create one post per uploaded image, sharing description and location.

    Raises:
        ValidationFailedError: If no images, or too many, were uploaded.
    """
    if not uploads:
        raise ValidationFailedError("No images uploaded")
    if len(uploads) > max_files:
        raise ValidationFailedError(f"At most {max_files} images can be uploaded at once")

    # Validate everything before anything touches the disk.
    for upload in uploads:
        images.validate(upload)

    filenames: list[str] = []
    try:
        for upload in uploads:
            filenames.append(await images.save(upload))
        posts = [
            Post(user_id=author.id, description=description, location=location, image=name)
            for name in filenames
        ]
        db.add_all(posts)
        db.commit()
    except Exception:
        db.rollback()
        for name in filenames:
            images.remove(name)
        raise

    ids = [post.id for post in posts]
    return post_query(db).filter(Post.id.in_(ids)).order_by(Post.id).all()


def _get_owned_post(db: Session, post_id: int, actor: User, action: str) -> Post:
    post = get_post_or_404(db, post_id)
    if post.user_id != actor.id:
        raise ForbiddenError(f"Not authorized to {action} this post")
    return post


async def update_post(
    db: Session,
    actor: User,
    post_id: int,
    images: ImageStore,
    *,
    description: str | None = None,
    location: str | None = None,
    image: UploadFile | None = None,
) -> Post:
    """Change description, location or image of a post the actor owns.

    Empty values leave the field unchanged; a new image replaces the old file.
    """
    post = _get_owned_post(db, post_id, actor, "update")

    if description:
        post.description = description
    if location:
        post.location = location

    old_image = post.image
    new_image = await images.save(image) if image is not None else None
    if new_image is not None:
        post.image = new_image

    try:
        db.commit()
    except Exception:
        db.rollback()
        images.remove(new_image)
        raise
    if new_image is not None:
        images.remove(old_image)
    return get_post_or_404(db, post_id)


def delete_post(db: Session, actor: User, post_id: int, images: ImageStore) -> None:
    """Delete a post the actor owns together with its comments and likes.

    Comments go first and the whole cascade commits as one transaction; the
    image file is removed only after the rows are gone.

    Raises:
        NotFoundError: If the post does not exist.
        ForbiddenError: If the actor is not the author.
    """
    post = _get_owned_post(db, post_id, actor, "delete")
    image = post.image

    removed_comments = db.query(Comment).filter(Comment.post_id == post.id).delete(
        synchronize_session=False
    )
    db.delete(post)
    db.commit()

    images.remove(image)
    logger.info(
        "User %s deleted post %s and %d comment(s)", actor.id, post_id, removed_comments
    )


def _count_likes(db: Session, post_id: int) -> int:
    return db.query(PostLike).filter(PostLike.post_id == post_id).count()


def like_post(db: Session, actor: User, post_id: int) -> int:
    """Add the actor to the post's likes and return the new like count.

    Raises:
        NotFoundError: If the post does not exist.
        ConflictError: If the actor already likes the post.
    """
    post = get_post_or_404(db, post_id)
    if actor.id in post.liker_ids:
        raise ConflictError("Post already liked")

    db.add(PostLike(post_id=post.id, user_id=actor.id))
    try:
        db.commit()
    except IntegrityError as err:
        db.rollback()
        raise ConflictError("Post already liked") from err
    return _count_likes(db, post_id)


def unlike_post(db: Session, actor: User, post_id: int) -> int:
    """Remove the actor from the post's likes and return the new like count.

    Raises:
        NotFoundError: If the post does not exist.
        InvalidStateError: If the actor does not like the post.
    """
    get_post_or_404(db, post_id)
    like = db.get(PostLike, (post_id, actor.id))
    if like is None:
        raise InvalidStateError("Post not liked yet")

    db.delete(like)
    db.commit()
    return _count_likes(db, post_id)
