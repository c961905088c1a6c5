"""Streams an incoming GraphQL file upload into the media store."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Protocol

from ..config import settings
from ..logging import get_logger
from .base import MediaStore, MediaStoreError, MediaUploadError
from .factory import create_media_store

logger = get_logger(__name__)

CHUNK_SIZE = 64 * 1024
PHOTO_RESOURCE_TYPE = "image"


class UploadedFile(Protocol):
    """The parts of an uploaded file the coordinator relies on."""

    filename: str | None
    content_type: str | None

    async def read(self, size: int = -1) -> bytes: ...


async def _read_chunks(upload: UploadedFile, max_size: int) -> AsyncIterator[bytes]:
    total = 0
    while chunk := await upload.read(CHUNK_SIZE):
        total += len(chunk)
        if total > max_size:
            raise MediaUploadError(f"File exceeds the {max_size} byte upload limit")
        yield chunk


async def upload_photo(
    upload: UploadedFile | None,
    store: MediaStore | None = None,
    folder: str | None = None,
) -> str | None:
    """
    Upload an employee photo and return its hosted URL.

    Returns None when no upload was supplied. Any failure, whether from the
    store, the incoming stream, or the size limit, raises MediaUploadError.
    There is no retry.
    """
    if upload is None:
        return None

    content_type = upload.content_type
    if content_type and not content_type.startswith("image/"):
        raise MediaUploadError(f"Unsupported content type for a photo: {content_type}")

    try:
        store = store or create_media_store()
        reference = await store.upload(
            _read_chunks(upload, settings.max_upload_size),
            folder=folder or settings.media_folder,
            resource_type=PHOTO_RESOURCE_TYPE,
            filename=upload.filename,
            content_type=content_type,
        )
    except MediaUploadError:
        raise
    except Exception as e:
        raise MediaUploadError(str(e)) from e

    logger.info(
        "Photo uploaded",
        media_key=reference.key,
        size=reference.size,
        provider=store.name,
    )
    return reference.secure_url


async def discard_photo(url: str | None, store: MediaStore | None = None) -> bool:
    """
    Delete a previously uploaded photo, best effort.

    Called once the row no longer points at the photo. Failures are logged
    and reported as False; the directory change they follow already stands.
    """
    if not url:
        return False

    try:
        store = store or create_media_store()
        key = store.key_from_url(url)
        if key is None:
            logger.warning("Photo URL does not belong to the media store", url=url)
            return False
        deleted = await store.delete(key)
    except (MediaStoreError, ValueError, ImportError) as e:
        logger.warning("Photo cleanup failed", url=url, error=str(e))
        return False

    logger.info("Photo deleted", media_key=key, found=deleted)
    return deleted
