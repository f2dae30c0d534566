"""User-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from .profile import ProfileResponse, ProfileSummary


class SignupRequest(BaseModel):
    """Schema for account registration."""

    username: str = Field(..., min_length=1, max_length=64, description="Unique handle")
    email: EmailStr = Field(..., description="Unique email address")
    password: str = Field(..., min_length=1, description="Plain-text password")

    @field_validator("username", "email", mode="before")
    @classmethod
    def strip_whitespace(cls, v: object) -> object:
        """Trim surrounding whitespace before length and address checks."""
        return v.strip() if isinstance(v, str) else v


class SigninRequest(BaseModel):
    """Schema for password sign-in."""

    email: EmailStr = Field(..., description="Registered email address")
    password: str = Field(..., min_length=1, description="Plain-text password")


class UserSummary(BaseModel):
    """A user reference expanded with a profile summary."""

    id: int
    username: str
    profile: ProfileSummary | None = None

    model_config = ConfigDict(from_attributes=True)


class UserResponse(BaseModel):
    """Account information returned by the API; never includes the password."""

    id: int
    username: str
    email: str
    profile_id: int | None = None
    followers: list[int] = Field(default_factory=list, validation_alias="follower_ids")
    following: list[int] = Field(default_factory=list, validation_alias="following_ids")
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class FollowRef(BaseModel):
    """Minimal reference to a follower or followed user."""

    id: int
    username: str
    profile_id: int | None = None

    model_config = ConfigDict(from_attributes=True)


class UserWithProfileResponse(UserResponse):
    """Account information with the profile expanded."""

    profile: ProfileResponse | None = None


class AuthResponse(BaseModel):
    """Response returned after signup or signin."""

    message: str
    user: UserWithProfileResponse
    token: str = Field(..., description="JWT access token")


class MeResponse(BaseModel):
    """The caller's account with profile and relationships expanded."""

    id: int
    username: str
    email: str
    profile: ProfileResponse | None = None
    followers: list[FollowRef]
    following: list[FollowRef]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
