# This project was developed with assistance from AI tools.
"""Fixtures for functional tests.

The real app from ``portal_api.main`` is a module singleton; the root
conftest clears dependency_overrides after every test.
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from portal_api.main import app as real_app

from .mock_db import configure_app


@pytest.fixture
def app():
    """Return the real FastAPI app with all routers mounted."""
    return real_app


@pytest.fixture
def make_client(app):
    """Factory fixture: mock DB session in, TestClient out."""

    def _make(session: AsyncMock) -> TestClient:
        configure_app(app, session)
        return TestClient(app)

    return _make
