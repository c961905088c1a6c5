"""
Shared pytest fixtures and configuration for all tests.
"""

import os
import sys
from collections.abc import AsyncGenerator, Generator
from pathlib import Path
from typing import Any
from uuid import uuid4

import pytest
import pytest_asyncio

# Add src directory to path so imports work without an editable install
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from staffdir.auth.context import Identity  # noqa: E402
from staffdir.config import settings  # noqa: E402

TEST_JWT_SECRET = "test-secret-key-for-testing-only-0123456789"


class FakeUpload:
    """In-memory stand-in for a multipart file upload."""

    def __init__(
        self,
        content: bytes = b"\x89PNG\r\n\x1a\nfake",
        filename: str | None = "photo.png",
        content_type: str | None = "image/png",
    ):
        self._content = content
        self._offset = 0
        self.filename = filename
        self.content_type = content_type

    async def read(self, size: int = -1) -> bytes:
        if size < 0:
            size = len(self._content) - self._offset
        chunk = self._content[self._offset : self._offset + size]
        self._offset += len(chunk)
        return chunk


@pytest.fixture
def fake_upload() -> type[FakeUpload]:
    return FakeUpload


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture(autouse=True)
def configured_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Any:
    """Point settings at throwaway secrets and a temporary media directory."""
    monkeypatch.setattr(settings, "jwt_secret", TEST_JWT_SECRET)
    monkeypatch.setattr(settings, "auth_enforced", True)
    monkeypatch.setattr(settings, "password_hash_rounds", 4)
    monkeypatch.setattr(settings, "media_provider", "local")
    monkeypatch.setattr(settings, "media_local_path", str(tmp_path / "media"))
    monkeypatch.setattr(settings, "media_public_url_base", "http://testserver/media")
    return settings


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'staffdir.db'}"


@pytest_asyncio.fixture(scope="function")
async def db(database_url: str) -> AsyncGenerator[None, None]:
    """Initialize the shared engine against a fresh SQLite database with the schema applied."""
    from staffdir.database.connection import create_schema, dispose_database, init_database

    init_database(database_url, force_reinit=True)
    await create_schema()
    yield
    await dispose_database()


@pytest.fixture
def identity() -> Identity:
    return Identity(user_id=uuid4(), username="alice", email="alice@example.com")


@pytest.fixture
def auth_context(identity: Identity) -> dict[str, Any]:
    """GraphQL context for an authenticated caller."""
    return {"request": None, "identity": identity}


@pytest.fixture
def anonymous_context() -> dict[str, Any]:
    """GraphQL context for a caller without a valid token."""
    return {"request": None, "identity": None}


# Test markers
def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line(  # type: ignore[reportUnknownMemberType]
        "markers", "requires_db: mark test as requiring database connection"
    )
    config.addinivalue_line("markers", "integration: mark test as integration test")  # type: ignore[reportUnknownMemberType]
    config.addinivalue_line("markers", "unit: mark test as unit test")  # type: ignore[reportUnknownMemberType]
