"""Profile details owned by a single user."""
from __future__ import annotations

import logging

from fastapi import UploadFile
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from mingle.core.exceptions import ConflictError, NotFoundError
from mingle.models import ProfileDetails, User
from mingle.schemas.profile import ProfileFields

from .storage import ImageStore

logger = logging.getLogger(__name__)

__all__ = [
    "list_profiles",
    "get_profile_or_404",
    "get_my_profile",
    "create_profile",
    "update_profile",
    "delete_profile",
]


def _ensure_username_free(db: Session, username: str, owner_id: int) -> None:
    taken = db.query(ProfileDetails).filter(
        ProfileDetails.username == username,
        ProfileDetails.user_id != owner_id,
    ).first()
    if taken is not None:
        raise ConflictError("Username already taken")


def list_profiles(db: Session) -> list[ProfileDetails]:
    """Return every profile."""
    return db.query(ProfileDetails).order_by(ProfileDetails.id).all()


def get_profile_or_404(db: Session, profile_id: int) -> ProfileDetails:
    """Return a profile by id or raise ``NotFoundError``."""
    profile = db.get(ProfileDetails, profile_id)
    if profile is None:
        raise NotFoundError("Profile not found")
    return profile


def get_my_profile(db: Session, owner: User) -> ProfileDetails:
    """Return the caller's profile or raise ``NotFoundError``."""
    profile = db.query(ProfileDetails).filter(ProfileDetails.user_id == owner.id).first()
    if profile is None:
        raise NotFoundError("Profile not found")
    return profile


async def create_profile(
    db: Session,
    owner: User,
    fields: ProfileFields,
    images: ImageStore,
    image: UploadFile | None = None,
) -> ProfileDetails:
    """Create the caller's profile.

    Raises:
        ConflictError: If the caller already has a profile or the username is
            used by another profile.
    """
    existing = db.query(ProfileDetails).filter(ProfileDetails.user_id == owner.id).first()
    if existing is not None:
        raise ConflictError("Profile already exists for this user")
    if fields.username:
        _ensure_username_free(db, fields.username, owner.id)

    profile_image = await images.save(image) if image is not None else None
    profile = ProfileDetails(user_id=owner.id, profile_image=profile_image, **fields.provided())
    db.add(profile)
    try:
        db.commit()
    except IntegrityError as err:
        db.rollback()
        images.remove(profile_image)
        raise ConflictError("Profile already exists for this user") from err
    db.refresh(profile)
    return profile


async def update_profile(
    db: Session,
    owner: User,
    fields: ProfileFields,
    images: ImageStore,
    image: UploadFile | None = None,
    remove_image: bool = False,
) -> ProfileDetails:
    """Apply non-empty fields and image changes to the caller's profile.

    A new image replaces the old file; ``remove_image`` clears it.
    """
    profile = get_my_profile(db, owner)
    if fields.username and fields.username != profile.username:
        _ensure_username_free(db, fields.username, owner.id)

    for key, value in fields.provided().items():
        setattr(profile, key, value)

    old_image = profile.profile_image
    new_image = await images.save(image) if image is not None else None
    if new_image is not None:
        profile.profile_image = new_image
    elif remove_image:
        profile.profile_image = None

    try:
        db.commit()
    except Exception:
        db.rollback()
        images.remove(new_image)
        raise
    if old_image and old_image != profile.profile_image:
        images.remove(old_image)
    db.refresh(profile)
    return profile


def delete_profile(db: Session, owner: User, images: ImageStore) -> None:
    """Delete the caller's profile, which also clears ``User.profile_id``."""
    profile = get_my_profile(db, owner)
    profile_id, image = profile.id, profile.profile_image
    db.delete(profile)
    db.commit()
    images.remove(image)
    logger.info("Deleted profile %s of user %s", profile_id, owner.id)
