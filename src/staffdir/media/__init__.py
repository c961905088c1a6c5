"""Media storage for employee photos."""

from .base import MediaReference, MediaStore, MediaStoreError, MediaUploadError, SecurityException
from .factory import create_media_store
from .upload import upload_photo

__all__ = [
    "MediaReference",
    "MediaStore",
    "MediaStoreError",
    "MediaUploadError",
    "SecurityException",
    "create_media_store",
    "upload_photo",
]
