"""Password hashing with bcrypt."""

import asyncio
import functools

import bcrypt

from ..config import settings

# bcrypt only looks at the first 72 bytes of a password
_BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


async def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash a password with a per-password salt, off the event loop."""
    salt = bcrypt.gensalt(rounds=rounds or settings.password_hash_rounds)
    hashed = await asyncio.to_thread(bcrypt.hashpw, _encode(password), salt)
    return hashed.decode("utf-8")


async def verify_password(password: str, hashed_password: str) -> bool:
    try:
        return await asyncio.to_thread(
            bcrypt.checkpw, _encode(password), hashed_password.encode("utf-8")
        )
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


@functools.lru_cache(maxsize=4)
def _placeholder_hash(rounds: int) -> bytes:
    return bcrypt.hashpw(b"staffdir-placeholder", bcrypt.gensalt(rounds=rounds))


async def reject_password(password: str) -> bool:
    """
    Run one bcrypt check against a throwaway hash and report failure.

    Logins for unknown accounts go through this so they cost the same as a
    wrong password for an existing one.
    """
    placeholder = await asyncio.to_thread(_placeholder_hash, settings.password_hash_rounds)
    await asyncio.to_thread(bcrypt.checkpw, _encode(password), placeholder)
    return False
