"""Tests for request-scoped logging context."""

from uuid import uuid4

from staffdir.auth.context import Identity
from staffdir.logging import (
    RequestContextFilter,
    bind_request,
    clear_request_context,
    current_request_id,
    generate_request_id,
    redact_credentials,
)


def test_generate_request_id():
    first = generate_request_id()
    second = generate_request_id()

    assert len(first) == 16
    assert first != second


def test_bound_identity_appears_in_events():
    identity = Identity(user_id=uuid4(), username="alice", email="alice@example.com")

    assert bind_request("req-1", identity) == "req-1"
    try:
        assert current_request_id() == "req-1"

        event = RequestContextFilter()(None, "info", {"event": "hello"})

        assert event == {
            "event": "hello",
            "request_id": "req-1",
            "user_id": str(identity.user_id),
            "username": "alice",
        }
    finally:
        clear_request_context()

    assert current_request_id() is None
    assert RequestContextFilter()(None, "info", {"event": "hello"}) == {"event": "hello"}


def test_anonymous_request_logs_only_request_id():
    request_id = bind_request(None, None)
    try:
        assert request_id
        assert current_request_id() == request_id
        assert RequestContextFilter()(None, "info", {"event": "x"}) == {
            "event": "x",
            "request_id": request_id,
        }
    finally:
        clear_request_context()


def test_explicit_user_id_is_not_overwritten():
    identity = Identity(user_id=uuid4(), username="alice", email="alice@example.com")
    bind_request("req-2", identity)
    try:
        event = RequestContextFilter()(None, "info", {"event": "x", "user_id": "other"})
    finally:
        clear_request_context()

    assert event["user_id"] == "other"


def test_filter_without_context():
    assert RequestContextFilter()(None, "info", {"event": "hello"}) == {"event": "hello"}


def test_redact_credentials():
    event = redact_credentials(None, "info", {"event": "login", "password": "hunter2", "username": "bob"})

    assert event == {"event": "login", "password": "[REDACTED]", "username": "bob"}
