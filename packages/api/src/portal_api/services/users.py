# This project was developed with assistance from AI tools.
"""Credential lookup and login."""

import logging

from portal_db import User
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.security import check_password

logger = logging.getLogger(__name__)


async def get_user_by_username(session: AsyncSession, username: str) -> User | None:
    result = await session.execute(select(User).where(User.username == username))
    return result.scalar_one_or_none()


async def authenticate(session: AsyncSession, username: str, password: str) -> User | None:
    """Return the user when the password matches, else None.

    Unknown username and wrong password are indistinguishable to the caller,
    in the answer and in the time it takes.
    """
    user = await get_user_by_username(session, username)
    stored_hash = user.password if user is not None else None
    matched = await check_password(password, stored_hash)
    if user is None or not matched:
        logger.info("Failed login for username=%s", username)
        return None
    return user
