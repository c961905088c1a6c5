"""Authentication and authorization errors."""

from __future__ import annotations


class AuthenticationError(Exception):
    """Raised when a token cannot be verified."""

    pass


class UnauthorizedError(Exception):
    """Raised when a guarded operation is called without a valid identity."""

    code = "UNAUTHORIZED"

    def __init__(self, message: str = "Unauthorized: missing/invalid token"):
        super().__init__(message)
        self.message = message
