# src/mingle/services/__init__.py
"""Business logic services for the Mingle application."""

from .storage import ImageStore, ImageStores, build_image_stores

__all__ = [
    "ImageStore",
    "ImageStores",
    "build_image_stores",
]
