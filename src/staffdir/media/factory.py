"""Factory for the configured media store."""

from pathlib import Path

from ..config import settings
from .base import MediaStore
from .implementations.local import LocalMediaStore

try:
    from .implementations.s3 import S3MediaStore, _s3_available
except ImportError:
    S3MediaStore = None
    _s3_available = False


def create_media_store(provider: str | None = None) -> MediaStore:
    """Create a media store instance from settings.

    Raises:
        ValueError: If the provider is unknown or misconfigured
        ImportError: If the provider's dependencies are not installed
    """
    provider = provider or settings.media_provider

    if provider == "local":
        return LocalMediaStore(
            base_path=Path(settings.media_local_path),
            public_url_base=settings.media_public_url_base
            or f"http://localhost:{settings.api_port}/media",
        )
    elif provider == "s3":
        if not _s3_available or S3MediaStore is None:
            raise ImportError(
                "S3 media storage requires additional dependencies. "
                "Install with: pip install staffdir[media-s3]"
            )
        if not settings.media_s3_bucket:
            raise ValueError("S3 media store requires STAFFDIR_MEDIA_S3_BUCKET")
        return S3MediaStore(
            bucket=settings.media_s3_bucket,
            region=settings.media_s3_region,
            aws_access_key_id=settings.media_s3_access_key_id,
            aws_secret_access_key=settings.media_s3_secret_access_key,
            endpoint_url=settings.media_s3_endpoint_url,
            public_url_base=settings.media_public_url_base,
        )
    else:
        raise ValueError(f"Unknown media provider: {provider}")
