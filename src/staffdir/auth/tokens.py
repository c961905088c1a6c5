"""JWT issuance and verification for self-issued session tokens."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING
from uuid import UUID

import jwt
from jwt.exceptions import InvalidTokenError

from ..config import settings
from ..logging import get_logger
from .context import Identity
from .exceptions import AuthenticationError

if TYPE_CHECKING:
    from ..dbmodels import Users

logger = get_logger(__name__)


class TokenService:
    """Signs and verifies `{userId, username, email}` tokens."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        issuer: str = "staffdir",
        audience: str = "staffdir-api",
        token_expiry_hours: int = 2,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.issuer = issuer
        self.audience = audience
        self.token_expiry_hours = token_expiry_hours

    def issue_token(self, user: Users) -> str:
        """Issue a new token for a persisted user."""
        now = datetime.now(UTC)

        payload = {
            "iss": self.issuer,
            "aud": self.audience,
            "iat": now,
            "exp": now + timedelta(hours=self.token_expiry_hours),
            "userId": str(user.id),
            "username": user.username,
            "email": user.email,
        }

        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: str) -> Identity:
        """Verify a token and return the identity it carries."""
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                audience=self.audience,
                options={"require": ["exp", "iat"]},
            )

            user_id = payload.get("userId")
            if not user_id:
                raise AuthenticationError("Missing 'userId' claim in token")

            return Identity(
                user_id=UUID(user_id),
                username=payload.get("username", ""),
                email=payload.get("email", ""),
                claims=payload,
            )

        except AuthenticationError:
            raise
        except InvalidTokenError as e:
            logger.debug("JWT token validation failed", error=str(e))
            raise AuthenticationError("Invalid token") from e
        except ValueError as e:
            raise AuthenticationError("Malformed 'userId' claim") from e


def get_token_service() -> TokenService:
    """Build a token service from the current settings."""
    if not settings.jwt_secret:
        raise RuntimeError("STAFFDIR_JWT_SECRET must be configured to sign tokens")

    return TokenService(
        secret_key=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
        token_expiry_hours=settings.jwt_expiry_hours,
    )
