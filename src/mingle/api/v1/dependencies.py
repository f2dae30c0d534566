"""Shared API dependencies for authentication and common functionality."""

import logging
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from mingle.core.exceptions import UnauthenticatedError
from mingle.core.settings import Settings
from mingle.db.session import get_db
from mingle.models import User
from mingle.services.storage import ImageStores
from mingle.services.user_service import resolve_caller

logger = logging.getLogger(__name__)

# HTTP Bearer scheme for JWT authentication; a missing header is reported by
# get_current_user so the error body matches every other auth failure.
bearer_scheme = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    """Return the settings the application was created with."""
    settings: Settings = request.app.state.settings
    return settings


def get_image_stores(request: Request) -> ImageStores:
    """Return the post and profile image stores."""
    stores: ImageStores = request.app.state.image_stores
    return stores


# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
ImageStoresDep = Annotated[ImageStores, Depends(get_image_stores)]
CredentialsDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def get_current_user(
    credentials: CredentialsDep,
    db: SessionDep,
    settings: SettingsDep,
) -> User:
    """Get the current authenticated user from the bearer token.

    Args:
        credentials: HTTP Bearer token credentials, if any were sent
        db: Database session
        settings: Application settings holding the signing key

    Returns:
        User object for the authenticated user

    Raises:
        UnauthenticatedError: If the token is missing or invalid, or the user
            no longer exists
    """
    token = credentials.credentials if credentials is not None else None
    return resolve_caller(db, token, settings)


def get_optional_user(
    credentials: CredentialsDep,
    db: SessionDep,
    settings: SettingsDep,
) -> User | None:
    """Return the authenticated user, or None when the request is anonymous."""
    if credentials is None:
        return None
    try:
        return resolve_caller(db, credentials.credentials, settings)
    except UnauthenticatedError as err:
        logger.debug("Ignoring unusable bearer token: %s", err.message)
        return None


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]
OptionalUserDep = Annotated[User | None, Depends(get_optional_user)]
