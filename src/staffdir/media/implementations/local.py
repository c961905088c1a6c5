"""Local filesystem media store for development and self-hosted deployments."""

from collections.abc import AsyncIterator
from pathlib import Path
from urllib.parse import quote

import aiofiles
import aiofiles.os

from ...logging import get_logger
from ..base import MediaReference, MediaStore, MediaStoreError, SecurityException, build_media_key

logger = get_logger(__name__)


class LocalMediaStore(MediaStore):
    """Writes media under a base directory and serves it from a public URL base."""

    name = "local"

    def __init__(self, base_path: Path | str, public_url_base: str | None = None):
        self.base_path = Path(base_path).resolve()
        self.public_url_base = public_url_base
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _get_safe_file_path(self, key: str) -> Path:
        """Get file path with security validation."""
        file_path = (self.base_path / key).resolve()

        try:
            file_path.relative_to(self.base_path)
        except ValueError as e:
            raise SecurityException(f"Path traversal detected: {key}") from e

        return file_path

    def _get_public_url(self, key: str) -> str:
        if self.public_url_base:
            encoded_key = quote(key, safe="/")
            return f"{self.public_url_base.rstrip('/')}/{encoded_key}"
        return f"file://{self.base_path / key}"

    async def upload(
        self,
        content: AsyncIterator[bytes],
        *,
        folder: str,
        resource_type: str,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> MediaReference:
        key = build_media_key(folder, resource_type, filename, content_type)
        file_path = self._get_safe_file_path(key)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        size = 0
        try:
            async with aiofiles.open(file_path, "wb") as f:
                async for chunk in content:
                    await f.write(chunk)
                    size += len(chunk)
        except OSError as e:
            logger.error("File system error writing media", key=key, error=str(e))
            await self._discard(file_path)
            raise MediaStoreError(f"Failed to write file: {e}") from e
        except Exception:
            # Stream failed mid-way; do not leave a truncated file behind
            await self._discard(file_path)
            raise

        logger.debug("Stored media locally", key=key, size=size)
        return MediaReference(
            key=key,
            secure_url=self._get_public_url(key),
            resource_type=resource_type,
            size=size,
        )

    async def _discard(self, file_path: Path) -> None:
        if file_path.exists():
            await aiofiles.os.remove(file_path)

    async def delete(self, key: str) -> bool:
        file_path = self._get_safe_file_path(key)
        if not file_path.exists():
            return False

        try:
            await aiofiles.os.remove(file_path)
        except OSError as e:
            raise MediaStoreError(f"Failed to delete file: {e}") from e
        return True
