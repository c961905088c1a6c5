"""
Access control for GraphQL resolvers
"""

from typing import Any

import strawberry
from strawberry.permission import BasePermission

from ..auth.context import Identity
from ..auth.middleware import identify, require_auth
from ..config import settings
from ..logging import get_logger

logger = get_logger(__name__)


def get_identity_from_info(info: strawberry.Info) -> Identity | None:
    """
    Return the identity resolved for this request.

    The context getter resolves it once per request; fall back to the raw
    request when a resolver is executed with a bare context.
    """
    context = info.context
    if "identity" in context:
        return context["identity"]

    request = context.get("request")
    if request is None:
        logger.error("Request not found in GraphQL context")
        return None
    return identify(request)


class IsAuthenticated(BasePermission):
    """Require a verified bearer token before the resolver runs."""

    message = "Unauthorized: missing/invalid token"

    def has_permission(self, source: Any, info: strawberry.Info, **kwargs: Any) -> bool:
        if not settings.auth_enforced:
            return True
        require_auth(get_identity_from_info(info))
        return True
