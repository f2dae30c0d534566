"""Profile endpoints. Mutations take multipart form data with an optional image."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from mingle.api.v1.dependencies import CurrentUserDep, ImageStoresDep, SessionDep
from mingle.schemas.common import ListResponse, MessageResponse
from mingle.schemas.profile import ProfileFields, ProfileResponse
from mingle.services import profile_service

router = APIRouter(prefix="/profiles", tags=["profiles"])


def profile_form(
    full_name: Annotated[str | None, Form()] = None,
    username: Annotated[str | None, Form()] = None,
    mobile_number: Annotated[str | None, Form()] = None,
    bio: Annotated[str | None, Form()] = None,
    gender: Annotated[str | None, Form()] = None,
    date_of_birth: Annotated[str | None, Form()] = None,
    location: Annotated[str | None, Form()] = None,
) -> ProfileFields:
    """Collect the profile form fields into a schema."""
    return ProfileFields(
        full_name=full_name,
        username=username,
        mobile_number=mobile_number,
        bio=bio,
        gender=gender,
        date_of_birth=date_of_birth,
        location=location,
    )


ProfileFormDep = Annotated[ProfileFields, Depends(profile_form)]
ImageUpload = Annotated[UploadFile | None, File()]


@router.post("", response_model=ProfileResponse, status_code=status.HTTP_201_CREATED)
async def create_profile(
    fields: ProfileFormDep,
    current_user: CurrentUserDep,
    db: SessionDep,
    stores: ImageStoresDep,
    image: ImageUpload = None,
) -> ProfileResponse:
    """Create the caller's profile."""
    profile = await profile_service.create_profile(
        db, current_user, fields, stores.profiles, image
    )
    return ProfileResponse.model_validate(profile)


@router.get("", response_model=ListResponse[ProfileResponse])
async def list_profiles(db: SessionDep) -> ListResponse[ProfileResponse]:
    """Return every profile."""
    profiles = profile_service.list_profiles(db)
    return ListResponse[ProfileResponse](data=[ProfileResponse.model_validate(p) for p in profiles])


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(current_user: CurrentUserDep, db: SessionDep) -> ProfileResponse:
    """Return the caller's profile."""
    return ProfileResponse.model_validate(profile_service.get_my_profile(db, current_user))


@router.get("/{profile_id}", response_model=ProfileResponse)
async def get_profile(profile_id: int, db: SessionDep) -> ProfileResponse:
    """Return a profile by id."""
    return ProfileResponse.model_validate(profile_service.get_profile_or_404(db, profile_id))


@router.put("", response_model=ProfileResponse)
async def update_profile(
    fields: ProfileFormDep,
    current_user: CurrentUserDep,
    db: SessionDep,
    stores: ImageStoresDep,
    image: ImageUpload = None,
    remove_image: Annotated[bool, Form()] = False,
) -> ProfileResponse:
    """Update the caller's profile; empty fields are left unchanged."""
    profile = await profile_service.update_profile(
        db, current_user, fields, stores.profiles, image, remove_image
    )
    return ProfileResponse.model_validate(profile)


@router.delete("", response_model=MessageResponse)
async def delete_profile(
    current_user: CurrentUserDep,
    db: SessionDep,
    stores: ImageStoresDep,
) -> MessageResponse:
    """Delete the caller's profile and its image."""
    profile_service.delete_profile(db, current_user, stores.profiles)
    return MessageResponse(message="Profile deleted successfully")
