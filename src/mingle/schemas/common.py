"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

ItemT = TypeVar("ItemT")


class MessageResponse(BaseModel):
    """Plain acknowledgement returned by mutation endpoints."""

    message: str = Field(..., description="Human readable outcome.")


class ListResponse(BaseModel, Generic[ItemT]):
    """Envelope for every collection result."""

    data: list[ItemT]
