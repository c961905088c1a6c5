"""
Centralized logging configuration using structlog
"""

from __future__ import annotations

import logging
import secrets
import sys
from contextvars import ContextVar
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from .auth.context import Identity

# Request-scoped values merged into every log line
request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)
identity_ctx: ContextVar[Identity | None] = ContextVar("identity", default=None)

# Event keys that must never reach a log sink
CREDENTIAL_KEYS = frozenset({"password", "token", "access_token", "authorization", "jwt_secret"})


class RequestContextFilter:
    """Add the request id and the authenticated caller to log records."""

    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        # Signature fixed by the structlog processor protocol
        _ = logger, method_name

        request_id = request_id_ctx.get()
        if request_id:
            event_dict["request_id"] = request_id

        identity = identity_ctx.get()
        if identity is not None:
            event_dict.setdefault("user_id", str(identity.user_id))
            event_dict.setdefault("username", identity.username)

        return event_dict


def redact_credentials(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Replace passwords and tokens passed as log fields."""
    _ = logger, method_name
    for key in CREDENTIAL_KEYS.intersection(event_dict):
        event_dict[key] = "[REDACTED]"
    return event_dict


def configure_logging(debug: bool = False) -> None:
    """Configure structlog with appropriate processors and formatters.

    Args:
        debug: If True, use human-readable console output. If False, use JSON.
    """
    log_level = logging.DEBUG if debug else logging.INFO

    # structlog renders; stdlib only routes to stdout
    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s",
        force=True,
    )

    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        RequestContextFilter(),
        redact_credentials,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if debug:
        # Development: human-readable console output
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def generate_request_id() -> str:
    """Return a 16-character url-safe id for requests that arrive without one."""
    return secrets.token_urlsafe(12)


def bind_request(request_id: str | None, identity: Identity | None) -> str:
    """Bind the request id and caller for log lines emitted while serving a request.

    Returns the bound request id, generated when the client did not send one.
    """
    if not request_id:
        request_id = generate_request_id()
    request_id_ctx.set(request_id)
    identity_ctx.set(identity)
    return request_id


def clear_request_context() -> None:
    request_id_ctx.set(None)
    identity_ctx.set(None)


def current_request_id() -> str | None:
    return request_id_ctx.get()
