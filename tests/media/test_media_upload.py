"""Tests for streaming GraphQL uploads into the media store."""

from unittest.mock import AsyncMock

import pytest

from staffdir.config import settings
from staffdir.media.base import MediaReference, MediaStoreError, MediaUploadError
from staffdir.media.upload import CHUNK_SIZE, discard_photo, upload_photo


@pytest.fixture
def recording_store():
    store = AsyncMock()
    store.name = "recording"
    calls = []

    async def upload(content, **kwargs):
        chunks = [chunk async for chunk in content]
        calls.append({"chunks": chunks, **kwargs})
        return MediaReference(
            key="image/f/abc.png",
            secure_url="https://media.example.com/image/f/abc.png",
            resource_type=kwargs["resource_type"],
            size=sum(len(c) for c in chunks),
        )

    store.upload.side_effect = upload
    store.calls = calls
    return store


@pytest.mark.asyncio
async def test_no_upload_returns_none(recording_store):
    assert await upload_photo(None, store=recording_store) is None
    recording_store.upload.assert_not_called()


@pytest.mark.asyncio
async def test_upload_returns_secure_url(recording_store, fake_upload):
    url = await upload_photo(fake_upload(b"png-bytes"), store=recording_store)

    assert url == "https://media.example.com/image/f/abc.png"
    call = recording_store.calls[0]
    assert b"".join(call["chunks"]) == b"png-bytes"
    assert call["folder"] == settings.media_folder
    assert call["resource_type"] == "image"
    assert call["content_type"] == "image/png"


@pytest.mark.asyncio
async def test_upload_is_streamed_in_chunks(recording_store, fake_upload, monkeypatch):
    monkeypatch.setattr(settings, "max_upload_size", 10 * CHUNK_SIZE)
    content = b"x" * (CHUNK_SIZE * 2 + 5)

    await upload_photo(fake_upload(content), store=recording_store, folder="custom")

    call = recording_store.calls[0]
    assert [len(c) for c in call["chunks"]] == [CHUNK_SIZE, CHUNK_SIZE, 5]
    assert call["folder"] == "custom"


@pytest.mark.asyncio
async def test_size_limit(recording_store, fake_upload, monkeypatch):
    monkeypatch.setattr(settings, "max_upload_size", 4)

    with pytest.raises(MediaUploadError, match="upload limit"):
        await upload_photo(fake_upload(b"12345"), store=recording_store)


@pytest.mark.asyncio
async def test_size_limit_boundary(recording_store, fake_upload, monkeypatch):
    monkeypatch.setattr(settings, "max_upload_size", 5)

    assert await upload_photo(fake_upload(b"12345"), store=recording_store)


@pytest.mark.asyncio
async def test_non_image_rejected(recording_store, fake_upload):
    with pytest.raises(MediaUploadError, match="content type"):
        await upload_photo(
            fake_upload(b"text", filename="a.txt", content_type="text/plain"),
            store=recording_store,
        )

    recording_store.upload.assert_not_called()


@pytest.mark.asyncio
async def test_store_errors_are_wrapped(fake_upload):
    store = AsyncMock()
    store.upload.side_effect = MediaStoreError("bucket missing")

    with pytest.raises(MediaUploadError, match="bucket missing") as exc_info:
        await upload_photo(fake_upload(), store=store)

    assert isinstance(exc_info.value.__cause__, MediaStoreError)


@pytest.mark.asyncio
async def test_default_store_is_configured_local(fake_upload, tmp_path):
    url = await upload_photo(fake_upload())

    assert url.startswith("http://testserver/media/image/")
    assert len(list((tmp_path / "media").rglob("*.png"))) == 1


@pytest.mark.asyncio
async def test_discard_removes_uploaded_file(fake_upload, tmp_path):
    url = await upload_photo(fake_upload())

    assert await discard_photo(url) is True
    assert list((tmp_path / "media").rglob("*.png")) == []


@pytest.mark.asyncio
async def test_discard_without_url_is_a_no_op(recording_store):
    assert await discard_photo(None, store=recording_store) is False
    recording_store.delete.assert_not_called()


@pytest.mark.asyncio
async def test_discard_ignores_foreign_urls(recording_store):
    recording_store.key_from_url = lambda url: None

    assert await discard_photo("https://elsewhere.example.com/a.png", store=recording_store) is False
    recording_store.delete.assert_not_called()


@pytest.mark.asyncio
async def test_discard_logs_store_failures(recording_store):
    recording_store.key_from_url = lambda url: "image/f/abc.png"
    recording_store.delete.side_effect = MediaStoreError("bucket gone")

    assert await discard_photo("https://media.example.com/image/f/abc.png", store=recording_store) is False
    recording_store.delete.assert_awaited_once_with("image/f/abc.png")
