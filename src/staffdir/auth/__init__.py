"""Authentication for the employee directory API."""

from .context import Identity
from .exceptions import AuthenticationError, UnauthorizedError
from .middleware import extract_bearer_token, identify, require_auth, resolve_identity
from .passwords import hash_password, reject_password, verify_password
from .tokens import TokenService, get_token_service

__all__ = [
    "AuthenticationError",
    "Identity",
    "TokenService",
    "UnauthorizedError",
    "extract_bearer_token",
    "get_token_service",
    "hash_password",
    "identify",
    "reject_password",
    "require_auth",
    "resolve_identity",
    "verify_password",
]
