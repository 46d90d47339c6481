# This project was developed with assistance from AI tools.
"""Integration test fixtures -- real PostgreSQL, no mocks.

A session-scoped container provides the store; the schema is created once
from the ORM metadata. Function-scoped fixtures give each test an isolated
session with savepoint rollback so tests don't leak state.
"""

import asyncio

import httpx
import pytest
import pytest_asyncio
from portal_db import DatabaseService, get_db, get_db_service
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import NullPool
from testcontainers.postgres import PostgresContainer

pytestmark = pytest.mark.integration


# ---------------------------------------------------------------------------
# Session-scoped: container + engine + schema
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def pg_container():
    """Start postgres:16-alpine via testcontainers."""
    with PostgresContainer(
        image="postgres:16-alpine",
        username="test",
        password="test",
        dbname="test",
    ) as pg:
        yield pg


@pytest.fixture(scope="session")
def db_url(pg_container):
    """Async DB URL for asyncpg."""
    host = pg_container.get_container_host_ip()
    port = pg_container.get_exposed_port(5432)
    return f"postgresql+asyncpg://test:test@{host}:{port}/test"


@pytest.fixture(scope="session")
def async_engine(db_url):
    """NullPool engine: connections are never shared across event loops."""
    engine = create_async_engine(db_url, echo=False, poolclass=NullPool)
    asyncio.run(DatabaseService(engine).create_schema())
    yield engine


@pytest.fixture(scope="session")
def db_service(async_engine):
    return DatabaseService(async_engine)


# ---------------------------------------------------------------------------
# Function-scoped: per-test session with savepoint rollback
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def db_session(async_engine):
    """Per-test DB session; service-level commits only release a savepoint."""
    conn = await async_engine.connect()
    txn = await conn.begin()
    session = AsyncSession(
        bind=conn,
        join_transaction_mode="create_savepoint",
        expire_on_commit=False,
    )
    yield session
    await session.close()
    await txn.rollback()
    await conn.close()


@pytest.fixture
def client_factory(db_session, db_service):
    """Factory returning an async httpx client bound to the test session.

    Authentication is not overridden: requests carry real signed tokens.
    """
    from portal_api.main import app

    async def _make() -> httpx.AsyncClient:
        async def _get_db():
            yield db_session

        app.dependency_overrides[get_db] = _get_db
        app.dependency_overrides[get_db_service] = lambda: db_service
        transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
        return httpx.AsyncClient(transport=transport, base_url="http://test")

    yield _make

    app.dependency_overrides.clear()
