"""Authenticated identity carried on each request."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from uuid import UUID


@dataclass(frozen=True)
class Identity:
    """Identity decoded from a verified bearer token."""

    user_id: UUID
    username: str
    email: str
    claims: dict[str, Any] = field(default_factory=dict, compare=False)
