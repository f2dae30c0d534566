"""Password hashing and access token primitives."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

from mingle.core.settings import Settings

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class InvalidTokenError(Exception):
    """Raised when an access token cannot be trusted."""


def hash_password(password: str) -> str:
    """Return a salted hash of ``password`` suitable for storage."""
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Check a candidate password against a stored hash."""
    try:
        return pwd_context.verify(password, password_hash)
    except ValueError:
        # Unrecognised or malformed hash
        return False


def create_access_token(user_id: int, settings: Settings) -> str:
    """Create a signed JWT identifying ``user_id``.

    Args:
        user_id: Primary key of the authenticated user.
        settings: Settings providing the secret, algorithm and lifetime.

    Returns:
        Encoded token string.
    """
    now = datetime.now(UTC)
    to_encode: dict[str, object] = {
        "sub": str(user_id),
        "iat": int(now.timestamp()),
        "exp": now + timedelta(minutes=settings.access_token_expire_minutes),
    }
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_access_token(token: str, settings: Settings) -> int:
    """Verify ``token`` and return the user id it carries.

    Raises:
        InvalidTokenError: If the signature, expiry or subject claim is invalid.
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as err:
        raise InvalidTokenError("Could not validate credentials") from err

    subject = payload.get("sub")
    if subject is None:
        raise InvalidTokenError("Token is missing a subject")
    try:
        return int(subject)
    except (TypeError, ValueError) as err:
        raise InvalidTokenError("Token subject is not a user id") from err
