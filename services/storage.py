"""File storage for the company logo."""

import uuid
from pathlib import Path

from loguru import logger

from core.config import settings
from services.errors import StorageError, ValidationError


class LogoStorage:
    """
    Stores uploaded logos in a local directory served as static files.

    Objects are written under a random name and addressed by a public URL
    built from `base_url`, so swapping in another backend only changes this
    class.
    """

    def __init__(self, root: str | Path, base_url: str):
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")

    def save(self, data: bytes, filename: str | None, content_type: str | None) -> str:
        """
        Store an image and return its public URL.

        Args:
            data: Raw file content.
            filename: Original file name, only used for its extension.
            content_type: MIME type reported by the upload.

        Returns:
            str: The URL to save in the company settings.
        """
        if not content_type or not content_type.startswith("image/"):
            raise ValidationError("Please upload an image file")

        extension = ""
        if filename and "." in filename:
            extension = "." + filename.rsplit(".", 1)[1].lower()
        object_name = f"{uuid.uuid4().hex}{extension}"

        try:
            self.root.mkdir(parents=True, exist_ok=True)
            (self.root / object_name).write_bytes(data)
        except OSError as e:
            logger.error(f"Failed to store logo {object_name}: {e}")
            raise StorageError("Failed to upload logo") from e

        logger.info(f"Stored logo {object_name} ({len(data)} bytes)")
        return f"{self.base_url}/{object_name}"

    def local_path(self, url: str | None) -> Path | None:
        """File behind a URL this storage produced, if it still exists."""
        if not url or not url.startswith(self.base_url + "/"):
            return None
        path = self.root / url[len(self.base_url) + 1:]
        return path if path.exists() else None


def get_logo_storage() -> LogoStorage:
    return LogoStorage(settings.media_root, settings.media_base_url)
