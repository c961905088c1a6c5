"""Core media store interface."""

import re
import uuid
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from dataclasses import dataclass
from urllib.parse import unquote

_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
    "image/svg+xml": ".svg",
}


@dataclass
class MediaReference:
    """Reference to hosted media."""

    key: str
    secure_url: str
    resource_type: str
    size: int = 0


class MediaStoreError(Exception):
    """Base exception for media store operations."""

    pass


class SecurityException(MediaStoreError):
    """Security-related media store exception."""

    pass


class MediaUploadError(MediaStoreError):
    """Raised when an upload could not be completed."""

    pass


def build_media_key(
    folder: str, resource_type: str, filename: str | None, content_type: str | None
) -> str:
    """Build a unique, sanitized key: `<resource_type>/<folder>/<uuid><ext>`."""
    ext = ""
    if filename and "." in filename:
        ext = "." + re.sub(r"[^a-zA-Z0-9]", "", filename.rsplit(".", 1)[1]).lower()
    if ext in ("", ".") and content_type:
        ext = _EXTENSIONS.get(content_type, "")

    parts = [resource_type, *folder.strip("/").split("/"), f"{uuid.uuid4().hex}{ext}"]
    sanitized = [re.sub(r"[^a-zA-Z0-9._-]", "", part) for part in parts]
    if any(not part or part in (".", "..") for part in sanitized):
        raise SecurityException(f"Invalid media folder: {folder}")
    return "/".join(sanitized)


class MediaStore(ABC):
    """Remote service that accepts a byte stream and hands back a public URL."""

    name: str = "media"

    @abstractmethod
    async def upload(
        self,
        content: AsyncIterator[bytes],
        *,
        folder: str,
        resource_type: str,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> MediaReference:
        """Consume the stream and store it.

        Raises:
            MediaStoreError: On upload failure
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete hosted media by key."""
        pass

    @abstractmethod
    def _get_public_url(self, key: str) -> str:
        pass

    def key_from_url(self, url: str) -> str | None:
        """Map a URL this store produced back to its key; None for any other URL."""
        prefix = self._get_public_url("")
        if not url.startswith(prefix):
            return None
        return unquote(url[len(prefix) :]).lstrip("/") or None
