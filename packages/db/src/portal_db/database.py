# This project was developed with assistance from AI tools.
"""Async engine lifecycle and per-request session dependency.

There is no module-level engine. The API constructs one ``DatabaseService``
in its lifespan hook, stores it on ``app.state.db_service`` and disposes it
on shutdown; ``get_db`` hands each request its own ``AsyncSession`` checked
out of that service's pool.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from .config import DatabaseSettings, db_settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class DatabaseService:
    """Owns the async engine (connection pool) and its session factory."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self.session_factory = async_sessionmaker(
            bind=engine,
            class_=AsyncSession,
            autoflush=False,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: DatabaseSettings | None = None) -> "DatabaseService":
        settings = settings or db_settings
        kwargs = {"echo": settings.SQL_ECHO, "pool_pre_ping": True}
        if not settings.DATABASE_URL.startswith("sqlite"):
            kwargs["pool_size"] = settings.DB_POOL_SIZE
        engine = create_async_engine(settings.DATABASE_URL, **kwargs)
        return cls(engine)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self.session_factory() as session:
            yield session

    async def create_schema(self) -> None:
        """Create missing tables. Not a migration tool: existing tables are left untouched."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def health_check(self) -> bool:
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception:
            logger.warning("Database health check failed", exc_info=True)
            return False

    async def close(self) -> None:
        await self.engine.dispose()


def get_db_service(request: Request) -> DatabaseService:
    """FastAPI dependency: the DatabaseService opened by the app lifespan."""
    service = getattr(request.app.state, "db_service", None)
    if service is None:
        raise RuntimeError("Database service not initialised -- is the lifespan running?")
    return service


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """FastAPI dependency: one AsyncSession per request."""
    service = get_db_service(request)
    async with service.session() as session:
        yield session
