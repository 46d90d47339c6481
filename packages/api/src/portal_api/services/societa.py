# This project was developed with assistance from AI tools.
"""Company persistence.

Each mutation is a single statement and relies on the store's own
per-statement atomicity. Name uniqueness is enforced by the unique
constraint on ``societa.nome``; a violation surfaces as DuplicateNameError
instead of being pre-checked.
"""

import logging
from typing import Any

from portal_db import Societa
from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


class DuplicateNameError(ValueError):
    """Raised when a create/update collides with an existing company name."""

    def __init__(self, nome: Any = None) -> None:
        self.nome = nome
        super().__init__("company name already exists")


async def list_societa(session: AsyncSession) -> list[Societa]:
    """Return every company, ordered by id."""
    result = await session.execute(select(Societa).order_by(Societa.id))
    return list(result.scalars().all())


async def get_societa(session: AsyncSession, societa_id: int) -> Societa | None:
    result = await session.execute(select(Societa).where(Societa.id == societa_id))
    return result.scalar_one_or_none()


async def create_societa(session: AsyncSession, values: dict[str, Any]) -> Societa:
    """Insert a company and return the stored row."""
    societa = Societa(**values)
    session.add(societa)
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise DuplicateNameError(values.get("nome")) from exc
    # load server-side defaults (id, timestamps)
    await session.refresh(societa)
    logger.info("Created societa id=%s", societa.id)
    return societa


async def update_societa(
    session: AsyncSession,
    societa_id: int,
    values: dict[str, Any],
) -> Societa | None:
    """Apply a partial update. Returns None when the company does not exist.

    The row is re-read after the UPDATE; no transaction spans both
    statements, so a concurrent write in between is visible in the result.
    """
    stmt = update(Societa).where(Societa.id == societa_id).values(**values)
    try:
        result = await session.execute(stmt)
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise DuplicateNameError(values.get("nome")) from exc

    if result.rowcount == 0:
        return None
    logger.info("Updated societa id=%s fields=%s", societa_id, sorted(values))
    return await get_societa(session, societa_id)


async def delete_societa(session: AsyncSession, societa_id: int) -> bool:
    """Delete a company. Returns False when nothing was deleted."""
    result = await session.execute(delete(Societa).where(Societa.id == societa_id))
    await session.commit()
    deleted = result.rowcount > 0
    if deleted:
        logger.info("Deleted societa id=%s", societa_id)
    return deleted
