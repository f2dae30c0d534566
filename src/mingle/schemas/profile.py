"""Profile-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ProfileFields(BaseModel):
    """Editable profile fields submitted as multipart form data."""

    full_name: str | None = None
    username: str | None = None
    mobile_number: str | None = None
    bio: str | None = None
    gender: str | None = None
    date_of_birth: str | None = None
    location: str | None = None

    def provided(self) -> dict[str, str]:
        """Return only the fields that carry a non-empty value."""
        return {key: value for key, value in self.model_dump().items() if value}


class ProfileSummary(BaseModel):
    """Display fields of a profile embedded in other responses."""

    id: int
    full_name: str | None = None
    profile_image: str | None = None

    model_config = ConfigDict(from_attributes=True)


class ProfileResponse(BaseModel):
    """Full profile details."""

    id: int
    user_id: int
    full_name: str | None = None
    username: str | None = None
    mobile_number: str | None = None
    bio: str | None = None
    gender: str | None = None
    date_of_birth: str | None = None
    location: str | None = None
    profile_image: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
