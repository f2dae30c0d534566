"""Domain errors raised by the service layer.

Each error carries the HTTP status it maps to; the application factory
registers a single handler that renders them as ``{"detail": message}``.
"""
from __future__ import annotations

from fastapi import status


class MingleError(Exception):
    """Base class for errors that are reported back to the caller."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(MingleError):
    """A referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ForbiddenError(MingleError):
    """The caller does not own the entity it tried to change."""

    # Ownership failures are reported as 401 to match the published API.
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authorized"


class ConflictError(MingleError):
    """A unique field or relationship state already exists."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Conflict"


class InvalidStateError(MingleError):
    """The relationship or like the caller wants to undo is not there."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid state"


class ValidationFailedError(MingleError):
    """A required field is missing or malformed."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class UnauthenticatedError(MingleError):
    """The caller could not be identified."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authorized"
