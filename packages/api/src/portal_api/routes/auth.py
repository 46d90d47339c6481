# This project was developed with assistance from AI tools.
"""Login, logout, identity and token refresh routes."""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status
from portal_db import get_db
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.tokens import issue_token, token_lifetime
from ..middleware.auth import CurrentUser
from ..schemas.auth import (
    LoginResponse,
    LogoutResponse,
    MeResponse,
    RefreshResponse,
    TokenSubject,
    UserPublic,
)
from ..services import users as user_service
from ..services.validation import validate_login

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(
    payload: Any = Body(default=None),
    session: AsyncSession = Depends(get_db),
) -> LoginResponse:
    """Exchange username/password for a bearer token.

    Unknown username and wrong password both answer 401 "invalid credentials".
    """
    ok, error = validate_login(payload)
    if not ok:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error)

    user = await user_service.authenticate(session, payload["username"], payload["password"])
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="invalid credentials",
        )

    subject = TokenSubject(
        id=user.id,
        username=user.username,
        role=user.role,
        societa_id=user.societa_id,
    )
    logger.info("Login succeeded for user=%s role=%s", user.username, subject.role.value)
    return LoginResponse(
        token=issue_token(subject),
        user=UserPublic(**subject.model_dump()),
        expires_in=token_lifetime(),
    )


@router.post("/logout", response_model=LogoutResponse)
async def logout() -> LogoutResponse:
    """Advisory only: tokens are stateless, the client discards its copy."""
    return LogoutResponse(message="Logged out. Discard the token on the client.")


@router.get("/me", response_model=MeResponse)
async def me(user: CurrentUser) -> MeResponse:
    """Return the identity carried by the caller's token."""
    return MeResponse(user=UserPublic(**user.model_dump()))


@router.post("/refresh", response_model=RefreshResponse)
async def refresh(user: CurrentUser) -> RefreshResponse:
    """Re-issue a token for the current identity without re-checking credentials."""
    return RefreshResponse(token=issue_token(user), expires_in=token_lifetime())
