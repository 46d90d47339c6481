# This project was developed with assistance from AI tools.
"""Signed, time-limited bearer tokens (HS256 via PyJWT).

Tokens are stateless: there is no revocation list, expiry is the only way a
token stops working. Nothing here touches FastAPI or the database.
"""

import logging
import re
from datetime import UTC, datetime, timedelta

import jwt
from pydantic import ValidationError

from ..schemas.auth import TokenPayload, TokenSubject
from .config import settings

logger = logging.getLogger(__name__)

_LIFETIME_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_UNIT_SECONDS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400}


class TokenConfigError(RuntimeError):
    """Raised when token signing is attempted without a usable configuration."""


def parse_lifetime(value: str) -> timedelta:
    """Parse a lifetime like ``24h``, ``30m``, ``7d`` or ``3600``."""
    match = _LIFETIME_RE.match(value or "")
    if not match:
        raise TokenConfigError(f"Invalid token lifetime: {value!r}")
    amount, unit = match.groups()
    seconds = int(amount) * _UNIT_SECONDS[unit]
    if seconds <= 0:
        raise TokenConfigError(f"Token lifetime must be positive: {value!r}")
    return timedelta(seconds=seconds)


def _require_secret() -> str:
    if not settings.JWT_SECRET:
        raise TokenConfigError("JWT_SECRET is not configured")
    return settings.JWT_SECRET


def token_lifetime() -> str:
    """The configured lifetime string, echoed back to clients as ``expiresIn``."""
    return settings.JWT_EXPIRES_IN


def check_token_config() -> None:
    """Fail fast on a missing secret or an unparseable lifetime (startup check)."""
    _require_secret()
    parse_lifetime(settings.JWT_EXPIRES_IN)


def issue_token(user: TokenSubject, now: datetime | None = None) -> str:
    """Sign a token carrying the user's id, username, role and societaId."""
    secret = _require_secret()
    issued_at = now or datetime.now(UTC)
    expires_at = issued_at + parse_lifetime(settings.JWT_EXPIRES_IN)

    claims: dict = {
        "id": user.id,
        "username": user.username,
        "role": user.role.value,
        "iat": int(issued_at.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    if user.societa_id is not None:
        claims["societaId"] = user.societa_id

    return jwt.encode(claims, secret, algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str) -> TokenPayload:
    """Decode and validate a token.

    Raises:
        jwt.ExpiredSignatureError: the token is past its ``exp``.
        jwt.InvalidTokenError: bad signature, malformed token or claims.
    """
    secret = _require_secret()
    payload = jwt.decode(
        token,
        secret,
        algorithms=[settings.JWT_ALGORITHM],
        options={"require": ["exp", "iat"]},
    )
    try:
        return TokenPayload.model_validate(payload)
    except ValidationError as exc:
        raise jwt.InvalidTokenError("Malformed token claims") from exc
