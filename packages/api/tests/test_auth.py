# This project was developed with assistance from AI tools.
"""Tests for the bearer-token dependencies (middleware.auth).

Each test mounts the dependencies on a throwaway app so the auth stage is
exercised on its own, without the company routes or a database.
"""

from datetime import UTC, datetime, timedelta

import jwt
import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient
from portal_db.enums import UserRole
from starlette.exceptions import HTTPException as StarletteHTTPException

from portal_api.core.tokens import issue_token
from portal_api.main import http_exception_handler
from portal_api.middleware.auth import CurrentUser, OptionalUser, require_roles
from portal_api.schemas.auth import TokenSubject

from .conftest import TEST_SECRET
from .functional.personas import admin, auth_header, buyer_alfa


@pytest.fixture
def auth_client() -> TestClient:
    app = FastAPI()
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    @app.get("/me")
    async def me(user: CurrentUser):
        return {"username": user.username, "role": user.role.value, "societaId": user.societa_id}

    @app.get("/maybe")
    async def maybe(user: OptionalUser):
        return {"anonymous": user is None}

    @app.get("/admin-only", dependencies=[Depends(require_roles(UserRole.ADMIN))])
    async def admin_only():
        return {"ok": True}

    return TestClient(app)


def _expired_token() -> str:
    issued = datetime.now(UTC) - timedelta(days=2)
    return issue_token(admin(), now=issued)


class TestCurrentUser:
    def test_missing_header_is_401(self, auth_client):
        resp = auth_client.get("/me")
        assert resp.status_code == 401
        assert resp.json() == {"error": "authentication required"}
        assert resp.headers["WWW-Authenticate"] == "Bearer"

    def test_non_bearer_scheme_is_401(self, auth_client):
        resp = auth_client.get("/me", headers={"Authorization": "Basic YWRtaW46YWRtaW4="})
        assert resp.status_code == 401

    def test_empty_bearer_is_401(self, auth_client):
        resp = auth_client.get("/me", headers={"Authorization": "Bearer "})
        assert resp.status_code == 401

    def test_garbage_token_is_403(self, auth_client):
        resp = auth_client.get("/me", headers={"Authorization": "Bearer not.a.jwt"})
        assert resp.status_code == 403
        assert resp.json() == {"error": "invalid token"}

    def test_expired_token_is_403(self, auth_client):
        resp = auth_client.get("/me", headers={"Authorization": f"Bearer {_expired_token()}"})
        assert resp.status_code == 403
        assert resp.json() == {"error": "invalid token"}

    def test_wrong_signature_is_403(self, auth_client):
        now = int(datetime.now(UTC).timestamp())
        forged = jwt.encode(
            {"id": 1, "username": "admin", "role": "admin", "iat": now, "exp": now + 60},
            TEST_SECRET + "-other",
            algorithm="HS256",
        )
        resp = auth_client.get("/me", headers={"Authorization": f"Bearer {forged}"})
        assert resp.status_code == 403

    def test_valid_token_yields_claims(self, auth_client):
        resp = auth_client.get("/me", headers=auth_header(buyer_alfa()))
        assert resp.status_code == 200
        assert resp.json() == {"username": "buyer_alfa", "role": "buyer", "societaId": 5}

    def test_scheme_is_case_insensitive(self, auth_client):
        token = issue_token(admin())
        resp = auth_client.get("/me", headers={"Authorization": f"bearer {token}"})
        assert resp.status_code == 200


class TestOptionalUser:
    def test_no_header_is_anonymous(self, auth_client):
        assert auth_client.get("/maybe").json() == {"anonymous": True}

    def test_invalid_token_is_anonymous(self, auth_client):
        resp = auth_client.get("/maybe", headers={"Authorization": "Bearer not.a.jwt"})
        assert resp.status_code == 200
        assert resp.json() == {"anonymous": True}

    def test_expired_token_is_anonymous(self, auth_client):
        resp = auth_client.get("/maybe", headers={"Authorization": f"Bearer {_expired_token()}"})
        assert resp.json() == {"anonymous": True}

    def test_valid_token_is_identified(self, auth_client):
        resp = auth_client.get("/maybe", headers=auth_header(admin()))
        assert resp.json() == {"anonymous": False}


class TestRequireRoles:
    def test_anonymous_is_401(self, auth_client):
        assert auth_client.get("/admin-only").status_code == 401

    def test_wrong_role_is_403_with_context(self, auth_client):
        resp = auth_client.get("/admin-only", headers=auth_header(buyer_alfa()))
        assert resp.status_code == 403
        assert resp.json() == {
            "error": "access denied",
            "requiredRoles": ["admin"],
            "yourRole": "buyer",
        }

    def test_allowed_role_passes(self, auth_client):
        resp = auth_client.get("/admin-only", headers=auth_header(admin()))
        assert resp.status_code == 200
        assert resp.json() == {"ok": True}

    def test_token_for_unknown_role_never_reaches_the_check(self, auth_client):
        now = int(datetime.now(UTC).timestamp())
        token = jwt.encode(
            {"id": 9, "username": "ceo", "role": "ceo", "iat": now, "exp": now + 60},
            TEST_SECRET,
            algorithm="HS256",
        )
        resp = auth_client.get("/admin-only", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 403
        assert resp.json() == {"error": "invalid token"}


def test_persona_subject_round_trips_through_header(auth_client):
    subject = TokenSubject(id=11, username="someone", role=UserRole.BUYER)
    resp = auth_client.get("/me", headers=auth_header(subject))
    assert resp.json()["societaId"] is None
