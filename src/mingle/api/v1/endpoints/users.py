"""Account endpoints: signup, signin and the caller's own record."""

from __future__ import annotations

from fastapi import APIRouter, status
from sqlalchemy.orm import selectinload

from mingle.api.v1.dependencies import CurrentUserDep, SessionDep, SettingsDep
from mingle.models import User
from mingle.schemas.user import (
    AuthResponse,
    MeResponse,
    SigninRequest,
    SignupRequest,
    UserWithProfileResponse,
)
from mingle.services import user_service

router = APIRouter(prefix="/users", tags=["users"])


def _auth_response(message: str, user: User, token: str) -> AuthResponse:
    return AuthResponse(
        message=message,
        user=UserWithProfileResponse.model_validate(user),
        token=token,
    )


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    payload: SignupRequest,
    db: SessionDep,
    settings: SettingsDep,
) -> AuthResponse:
    """Register an account, create its empty profile and return a token."""
    user, token = user_service.signup(db, payload, settings)
    return _auth_response("User created successfully", user, token)


@router.post("/signin", response_model=AuthResponse)
async def signin(
    payload: SigninRequest,
    db: SessionDep,
    settings: SettingsDep,
) -> AuthResponse:
    """Exchange email and password for a token."""
    user, token = user_service.signin(db, payload, settings)
    return _auth_response("Login successful", user, token)


@router.get("/me", response_model=MeResponse)
async def read_me(current_user: CurrentUserDep, db: SessionDep) -> MeResponse:
    """Return the caller with profile, followers and following expanded."""
    user = (
        db.query(User)
        .options(
            selectinload(User.profile),
            selectinload(User.followers).selectinload(User.profile),
            selectinload(User.following).selectinload(User.profile),
        )
        .filter(User.id == current_user.id)
        .one()
    )
    return MeResponse.model_validate(user)
