"""
Unit tests for the auth resolvers with the database mocked out
"""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import strawberry
from sqlalchemy.exc import IntegrityError

from staffdir.graphql.mutations.root import SignupInput
from staffdir.graphql.queries.root import LoginInput
from staffdir.graphql.resolvers.auth import INVALID_CREDENTIALS, USER_EXISTS, login, signup


@pytest.fixture
def mock_info():
    info = MagicMock(spec=strawberry.Info)
    info.context = {"request": None, "identity": None}
    return info


@pytest.fixture
def mock_session():
    session = MagicMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.rollback = AsyncMock()
    return session


@pytest.fixture
def patched_session(mock_session):
    @asynccontextmanager
    async def fake_session():
        yield mock_session

    with patch("staffdir.graphql.resolvers.auth.get_async_session", fake_session):
        yield mock_session


@pytest.mark.asyncio
async def test_signup_conflict_on_unique_constraint(mock_info, patched_session):
    """A concurrent signup that wins the race surfaces as 'already exists'."""
    lookup = MagicMock()
    lookup.first.return_value = None
    patched_session.execute.return_value = lookup
    patched_session.flush.side_effect = IntegrityError("INSERT", {}, Exception("duplicate"))

    with patch("staffdir.graphql.resolvers.auth.hash_password", AsyncMock(return_value="$2b$hash")):
        payload = await signup(
            mock_info, SignupInput(username="alice", email="a@x.com", password="secret1")
        )

    assert payload.success is False
    assert payload.message == USER_EXISTS
    assert payload.token is None
    patched_session.rollback.assert_awaited_once()


@pytest.mark.asyncio
async def test_signup_validation_skips_database(mock_info, patched_session):
    payload = await signup(mock_info, SignupInput(username="a", email="a@x.com", password="x"))

    assert payload.success is False
    assert [e.field for e in payload.errors] == ["username", "password"]
    patched_session.execute.assert_not_called()


@pytest.mark.asyncio
async def test_login_spends_a_hash_check_on_unknown_user(mock_info, patched_session):
    lookup = MagicMock()
    lookup.scalars.return_value.first.return_value = None
    patched_session.execute.return_value = lookup

    with (
        patch("staffdir.graphql.resolvers.auth.verify_password", AsyncMock()) as verify,
        patch(
            "staffdir.graphql.resolvers.auth.reject_password", AsyncMock(return_value=False)
        ) as reject,
    ):
        payload = await login(mock_info, LoginInput(username_or_email="ghost", password="secret1"))

    assert payload.success is False
    assert payload.message == INVALID_CREDENTIALS
    reject.assert_awaited_once_with("secret1")
    verify.assert_not_called()


@pytest.mark.asyncio
async def test_login_wrong_password(mock_info, patched_session):
    user = MagicMock(password="$2b$stored")
    lookup = MagicMock()
    lookup.scalars.return_value.first.return_value = user
    patched_session.execute.return_value = lookup

    with patch(
        "staffdir.graphql.resolvers.auth.verify_password", AsyncMock(return_value=False)
    ) as verify:
        payload = await login(mock_info, LoginInput(username_or_email="alice", password="nope"))

    verify.assert_awaited_once_with("nope", "$2b$stored")
    assert payload.success is False
    assert payload.message == INVALID_CREDENTIALS
    assert payload.user is None
