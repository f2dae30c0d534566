"""Account creation, sign-in and caller resolution."""
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from mingle.core import security
from mingle.core.exceptions import ConflictError, NotFoundError, UnauthenticatedError
from mingle.core.settings import Settings
from mingle.models import ProfileDetails, User
from mingle.schemas.user import SigninRequest, SignupRequest

logger = logging.getLogger(__name__)

__all__ = [
    "get_user",
    "get_user_or_404",
    "signup",
    "signin",
    "resolve_caller",
]


def get_user(db: Session, user_id: int) -> User | None:
    """Return a single user by primary key."""
    return db.get(User, user_id)


def get_user_or_404(db: Session, user_id: int) -> User:
    """Return a user or raise ``NotFoundError``."""
    user = get_user(db, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def signup(db: Session, payload: SignupRequest, settings: Settings) -> tuple[User, str]:
    """Create an account with an empty profile and issue a token.

    The user row and its profile are committed together, so a failed signup
    leaves nothing behind.

    Raises:
        ConflictError: If the email or username is already registered.
    """
    message = None
    if db.query(User).filter(User.email == payload.email).first() is not None:
        message = "Email already in use"
    elif db.query(User).filter(User.username == payload.username).first() is not None:
        message = "Username already taken"
    if message is not None:
        logger.info("Signup rejected for %s: %s", payload.username, message)
        raise ConflictError(message)

    user = User(
        username=payload.username,
        email=payload.email,
        password_hash=security.hash_password(payload.password),
    )
    user.profile = ProfileDetails(username=payload.username)
    db.add(user)
    try:
        db.commit()
    except IntegrityError as err:
        db.rollback()
        # Lost a race with a concurrent signup for the same email or username.
        raise ConflictError("Email or username already registered") from err
    db.refresh(user)

    logger.info("Created user %s (id=%s)", user.username, user.id)
    return user, security.create_access_token(user.id, settings)


def signin(db: Session, payload: SigninRequest, settings: Settings) -> tuple[User, str]:
    """Verify credentials and issue a token.

    Raises:
        NotFoundError: If no account uses the email.
        UnauthenticatedError: If the password does not match.
    """
    user = db.query(User).filter(User.email == payload.email).first()
    if user is None:
        raise NotFoundError("Email not found")

    if not security.verify_password(payload.password, user.password_hash):
        logger.warning("Failed sign-in for user id=%s", user.id)
        raise UnauthenticatedError("Incorrect password")

    return user, security.create_access_token(user.id, settings)


def resolve_caller(db: Session, token: str | None, settings: Settings) -> User:
    """Return the user a bearer token identifies.

    Raises:
        UnauthenticatedError: If the token is absent or invalid, or the user
            no longer exists.
    """
    if not token:
        raise UnauthenticatedError("Not authorized, no token")
    try:
        user_id = security.decode_access_token(token, settings)
    except security.InvalidTokenError as err:
        raise UnauthenticatedError("Not authorized, token failed") from err

    user = get_user(db, user_id)
    if user is None:
        raise UnauthenticatedError("User not found")
    return user
