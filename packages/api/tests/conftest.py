# This project was developed with assistance from AI tools.
"""Shared fixtures.

Every test runs with a known signing secret and the default 24h lifetime so
tokens can be issued and verified without any environment setup.
"""

import pytest
from fastapi.testclient import TestClient

from portal_api.core.config import settings
from portal_api.main import app as real_app

TEST_SECRET = "test-secret-key-not-for-production"


@pytest.fixture(autouse=True)
def _token_settings(monkeypatch):
    monkeypatch.setattr(settings, "JWT_SECRET", TEST_SECRET)
    monkeypatch.setattr(settings, "JWT_EXPIRES_IN", "24h")
    monkeypatch.setattr(settings, "JWT_ALGORITHM", "HS256")


@pytest.fixture(autouse=True)
def _clean_overrides():
    """Clear app dependency overrides after each test."""
    yield
    real_app.dependency_overrides.clear()


@pytest.fixture
def client():
    """TestClient over the real app without running the lifespan (no database)."""
    return TestClient(real_app)
