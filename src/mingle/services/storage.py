"""Disk-backed storage for uploaded post and profile images."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path

from fastapi import UploadFile

from mingle.core.exceptions import ValidationFailedError
from mingle.core.settings import Settings

logger = logging.getLogger(__name__)

__all__ = ["ImageStore", "ImageStores", "build_image_stores"]


class ImageStore:
    """Saves uploads into one directory under a timestamp-based filename."""

    def __init__(
        self,
        directory: str | Path,
        *,
        max_bytes: int,
        allowed_extensions: list[str],
    ) -> None:
        self.directory = Path(directory)
        self.max_bytes = max_bytes
        self.allowed_extensions = [ext.lower().lstrip(".") for ext in allowed_extensions]

    def ensure_directory(self) -> None:
        """Create the storage directory if it does not exist."""
        self.directory.mkdir(parents=True, exist_ok=True)

    def path_for(self, filename: str) -> Path:
        """Return the on-disk path of a stored file."""
        return self.directory / Path(filename).name

    def validate(self, upload: UploadFile) -> str:
        """Check an upload's extension and content type.

        Returns:
            The lower-cased extension including the leading dot.

        Raises:
            ValidationFailedError: If the upload is not an accepted image type.
        """
        suffix = Path(upload.filename or "").suffix.lower()
        content_type = (upload.content_type or "").lower()
        extension_ok = suffix.lstrip(".") in self.allowed_extensions
        mimetype_ok = any(ext in content_type for ext in self.allowed_extensions)
        if not (extension_ok and mimetype_ok):
            allowed = ", ".join(self.allowed_extensions)
            raise ValidationFailedError(f"Images only ({allowed})")
        return suffix

    def _unique_name(self, suffix: str) -> str:
        stem = str(int(time.time() * 1000))
        candidate = f"{stem}{suffix}"
        counter = 1
        while (self.directory / candidate).exists():
            candidate = f"{stem}-{counter}{suffix}"
            counter += 1
        return candidate

    async def save(self, upload: UploadFile) -> str:
        """Validate and persist an upload.

        Args:
            upload: File received from a multipart request.

        Returns:
            The stored filename (without directory).

        Raises:
            ValidationFailedError: If the file type or size is not accepted.
        """
        suffix = self.validate(upload)
        content = await upload.read(self.max_bytes + 1)
        if len(content) > self.max_bytes:
            raise ValidationFailedError(
                f"Image exceeds the {self.max_bytes // (1024 * 1024)}MB limit"
            )

        self.ensure_directory()
        filename = self._unique_name(suffix)
        self.path_for(filename).write_bytes(content)
        logger.debug("Stored upload %s as %s", upload.filename, filename)
        return filename

    def remove(self, filename: str | None) -> None:
        """Delete a stored file; a missing file is not an error."""
        if not filename:
            return
        try:
            self.path_for(filename).unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Could not remove image %s: %s", filename, exc)


@dataclass(frozen=True)
class ImageStores:
    """The two image stores used by the application."""

    posts: ImageStore
    profiles: ImageStore


def build_image_stores(settings: Settings) -> ImageStores:
    """Create image stores from settings and make sure their directories exist."""
    stores = ImageStores(
        posts=ImageStore(
            settings.post_image_dir,
            max_bytes=settings.post_image_max_bytes,
            allowed_extensions=settings.allowed_image_extensions,
        ),
        profiles=ImageStore(
            settings.profile_image_dir,
            max_bytes=settings.profile_image_max_bytes,
            allowed_extensions=settings.allowed_image_extensions,
        ),
    )
    stores.posts.ensure_directory()
    stores.profiles.ensure_directory()
    return stores
