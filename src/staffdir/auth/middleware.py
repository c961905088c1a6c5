"""Bearer token extraction and the authentication guard."""

from __future__ import annotations

from starlette.requests import HTTPConnection

from ..logging import get_logger
from .context import Identity
from .exceptions import AuthenticationError, UnauthorizedError
from .tokens import get_token_service

logger = get_logger(__name__)

BEARER_PREFIX = "Bearer "


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token from an `Authorization: Bearer <token>` header value."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    return authorization[len(BEARER_PREFIX) :] or None


def identify(request: HTTPConnection) -> Identity | None:
    """
    Resolve the caller's identity from the request.

    Returns None when the header is missing, malformed, or the token fails
    signature or expiry checks. Never raises.
    """
    token = extract_bearer_token(request.headers.get("authorization"))
    if token is None:
        return None

    try:
        return get_token_service().verify_token(token)
    except AuthenticationError as e:
        logger.debug("Ignoring unverifiable bearer token", error=str(e))
        return None
    except RuntimeError as e:
        logger.warning("Token verification unavailable", error=str(e))
        return None


def require_auth(identity: Identity | None) -> Identity:
    """Guard: raise UnauthorizedError unless an identity is present."""
    if identity is None:
        raise UnauthorizedError()
    return identity


def resolve_identity(request: HTTPConnection) -> Identity | None:
    """
    Identify the caller once per request.

    The result is kept on `request.state`, which every handler of the same
    ASGI scope shares, so later lookups skip token verification.
    """
    if hasattr(request.state, "identity"):
        return request.state.identity
    identity = identify(request)
    request.state.identity = identity
    return identity
