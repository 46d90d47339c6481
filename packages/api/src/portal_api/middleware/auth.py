# This project was developed with assistance from AI tools.
"""
Bearer-token authentication dependencies.

Two distinct stages, composed in front of route handlers:

- ``get_current_user`` (mandatory): 401 when no token is sent, 403 when the
  token is invalid or expired.
- ``get_optional_user`` (optional): anonymous when no token is sent, and
  also anonymous when the token is invalid -- public routes never hard-fail
  on a bad token.

``require_roles`` runs after the mandatory stage and applies
``core.policy.check_role``.
"""

import logging
from typing import Annotated

import jwt
from fastapi import Depends, HTTPException, Request, status
from portal_db.enums import UserRole

from ..core.policy import AuthenticationRequiredError, RoleNotAllowedError, check_role
from ..core.tokens import verify_token
from ..schemas.auth import UserContext

logger = logging.getLogger(__name__)


def _extract_token(request: Request) -> str | None:
    """Extract Bearer token from Authorization header."""
    auth = request.headers.get("Authorization")
    if not auth:
        return None
    scheme, _, token = auth.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def _to_context(token: str) -> UserContext:
    payload = verify_token(token)
    return UserContext(
        id=payload.id,
        username=payload.username,
        role=payload.role,
        societa_id=payload.societa_id,
    )


# ---------------------------------------------------------------------------
# FastAPI dependencies
# ---------------------------------------------------------------------------


async def get_current_user(request: Request) -> UserContext:
    """FastAPI dependency: require a valid token and return its identity."""
    token = _extract_token(request)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        return _to_context(token)
    except jwt.ExpiredSignatureError as exc:
        logger.info("Rejected expired token")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="invalid token",
        ) from exc
    except jwt.InvalidTokenError as exc:
        logger.info("Rejected invalid token: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="invalid token",
        ) from exc


async def get_optional_user(request: Request) -> UserContext | None:
    """FastAPI dependency: identity when a valid token is sent, else None."""
    token = _extract_token(request)
    if not token:
        return None
    try:
        return _to_context(token)
    except jwt.InvalidTokenError as exc:
        logger.debug("Ignoring invalid token on optional-auth route: %s", exc)
        return None


# Type aliases for use in route signatures
CurrentUser = Annotated[UserContext, Depends(get_current_user)]
OptionalUser = Annotated[UserContext | None, Depends(get_optional_user)]


def require_roles(*allowed_roles: UserRole):
    """Dependency factory: restrict a route to specific roles.

    Usage:
        @router.post("/", dependencies=[Depends(require_roles(UserRole.ADMIN))])
    """

    async def _check(user: CurrentUser) -> UserContext:
        try:
            return check_role(user, allowed_roles)
        except AuthenticationRequiredError as exc:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=str(exc),
            ) from exc
        except RoleNotAllowedError as exc:
            logger.warning(
                "RBAC denied: user=%s role=%s attempted route requiring %s",
                user.username,
                exc.role,
                exc.allowed,
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail={
                    "error": str(exc),
                    "requiredRoles": exc.allowed,
                    "yourRole": exc.role,
                },
            ) from exc

    return _check
