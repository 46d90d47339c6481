# This project was developed with assistance from AI tools.
"""Password hashing with bcrypt."""

import asyncio
import functools

import bcrypt

from .config import settings


def hash_password(password: str, rounds: int | None = None) -> str:
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Compare a plain password against a stored bcrypt hash.

    A malformed stored hash counts as a mismatch rather than an error so the
    login route keeps answering with the same generic 401.
    """
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


@functools.lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return hash_password("no-such-user")


def _verify_or_spend(password: str, password_hash: str | None) -> bool:
    if password_hash is None:
        # same bcrypt cost as a real mismatch, result discarded
        verify_password(password, _dummy_hash())
        return False
    return verify_password(password, password_hash)


async def check_password(password: str, password_hash: str | None) -> bool:
    """Verify a password in a worker thread.

    ``password_hash=None`` (unknown user) still runs one bcrypt comparison,
    so unknown usernames and wrong passwords take about the same time.
    """
    return await asyncio.to_thread(_verify_or_spend, password, password_hash)
