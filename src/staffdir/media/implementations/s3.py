"""AWS S3 (or S3-compatible) media store."""

from collections.abc import AsyncIterator
from typing import Any
from urllib.parse import quote

try:
    import aioboto3
    from botocore.config import Config
    from botocore.exceptions import BotoCoreError, ClientError

    _s3_available = True
except ImportError:
    aioboto3 = None
    Config = None
    BotoCoreError = None
    ClientError = None
    _s3_available = False

from ...logging import get_logger
from ..base import MediaReference, MediaStore, MediaStoreError, build_media_key

logger = get_logger(__name__)


class S3MediaStore(MediaStore):
    """Uploads media to an S3 bucket and returns its HTTPS URL."""

    name = "s3"

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        aws_access_key_id: str | None = None,
        aws_secret_access_key: str | None = None,
        endpoint_url: str | None = None,
        public_url_base: str | None = None,
    ):
        if not _s3_available:
            raise ImportError("aioboto3 is required for S3MediaStore")

        self.bucket = bucket
        self.region = region
        self.aws_access_key_id = aws_access_key_id
        self.aws_secret_access_key = aws_secret_access_key
        self.endpoint_url = endpoint_url
        self.public_url_base = public_url_base

        self.config = Config(  # type: ignore[reportOptionalCall]
            region_name=self.region,
            retries={"max_attempts": 1, "mode": "standard"},
        )
        self._session: Any | None = None

    def _get_session(self) -> Any:
        if self._session is None:
            self._session = aioboto3.Session(  # type: ignore[reportOptionalMemberAccess]
                aws_access_key_id=self.aws_access_key_id,
                aws_secret_access_key=self.aws_secret_access_key,
                region_name=self.region,
            )
        return self._session

    def _get_public_url(self, key: str) -> str:
        encoded_key = quote(key, safe="/")
        if self.public_url_base:
            return f"{self.public_url_base.rstrip('/')}/{encoded_key}"
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket}/{encoded_key}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{encoded_key}"

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

        # put_object needs a sized body; uploads are capped well below multipart sizes
        chunks = [chunk async for chunk in content]
        body = b"".join(chunks)

        try:
            async with self._get_session().client(
                "s3", endpoint_url=self.endpoint_url, config=self.config
            ) as s3:
                await s3.put_object(
                    Bucket=self.bucket,
                    Key=key,
                    Body=body,
                    ContentType=content_type or "application/octet-stream",
                )
        except (ClientError, BotoCoreError) as e:  # type: ignore[misc]
            logger.error("S3 upload failed", bucket=self.bucket, key=key, error=str(e))
            raise MediaStoreError(f"S3 upload failed: {e}") from e

        logger.debug("Stored media in S3", bucket=self.bucket, key=key, size=len(body))
        return MediaReference(
            key=key,
            secure_url=self._get_public_url(key),
            resource_type=resource_type,
            size=len(body),
        )

    async def delete(self, key: str) -> bool:
        try:
            async with self._get_session().client(
                "s3", endpoint_url=self.endpoint_url, config=self.config
            ) as s3:
                await s3.delete_object(Bucket=self.bucket, Key=key)
        except (ClientError, BotoCoreError) as e:  # type: ignore[misc]
            raise MediaStoreError(f"S3 delete failed: {e}") from e
        return True
