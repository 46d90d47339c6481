# This project was developed with assistance from AI tools.
"""Functional tests: login, identity and refresh."""

import pytest

from portal_db.enums import UserRole

from portal_api.core.tokens import verify_token

from .data_factory import make_user
from .mock_db import make_mock_session
from .personas import ALFA_SOCIETA_ID, auth_header, buyer_alfa

pytestmark = pytest.mark.functional


class TestLogin:
    def test_login_success_returns_token(self, make_client):
        user = make_user("buyer_alfa", "buyer123", UserRole.BUYER, ALFA_SOCIETA_ID, user_id=2)
        client = make_client(make_mock_session(single=user))

        resp = client.post("/api/auth/login", json={"username": "buyer_alfa", "password": "buyer123"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["tokenType"] == "Bearer"
        assert body["expiresIn"] == "24h"
        assert body["user"] == {
            "id": 2,
            "username": "buyer_alfa",
            "role": "buyer",
            "societaId": ALFA_SOCIETA_ID,
        }
        payload = verify_token(body["token"])
        assert payload.societa_id == ALFA_SOCIETA_ID

    def test_wrong_password_and_unknown_user_are_indistinguishable(self, make_client):
        user = make_user("admin", "admin123")
        wrong_password = make_client(make_mock_session(single=user)).post(
            "/api/auth/login", json={"username": "admin", "password": "nope-nope"}
        )
        unknown_user = make_client(make_mock_session(single=None)).post(
            "/api/auth/login", json={"username": "ghost", "password": "nope-nope"}
        )

        assert wrong_password.status_code == unknown_user.status_code == 401
        assert wrong_password.json() == unknown_user.json() == {"error": "invalid credentials"}

    @pytest.mark.parametrize(
        "body",
        [None, {}, {"username": "admin"}, {"password": "x"}, {"username": "", "password": "x"}],
    )
    def test_missing_credentials_returns_400(self, make_client, body):
        client = make_client(make_mock_session())

        resp = client.post("/api/auth/login", json=body)
        assert resp.status_code == 400


class TestSession:
    def test_logout_is_advisory(self, make_client):
        client = make_client(make_mock_session())

        resp = client.post("/api/auth/logout")
        assert resp.status_code == 200
        assert resp.json()["success"] is True

    def test_me_returns_identity(self, make_client):
        client = make_client(make_mock_session())

        resp = client.get("/api/auth/me", headers=auth_header(buyer_alfa()))
        assert resp.status_code == 200
        assert resp.json() == {
            "user": {"id": 2, "username": "buyer_alfa", "role": "buyer", "societaId": ALFA_SOCIETA_ID}
        }

    def test_me_without_token_returns_401(self, make_client):
        client = make_client(make_mock_session())

        resp = client.get("/api/auth/me")
        assert resp.status_code == 401
        assert resp.headers["WWW-Authenticate"] == "Bearer"

    def test_refresh_reissues_token_for_same_identity(self, make_client):
        client = make_client(make_mock_session())

        resp = client.post("/api/auth/refresh", headers=auth_header(buyer_alfa()))
        assert resp.status_code == 200
        body = resp.json()
        assert body["expiresIn"] == "24h"
        payload = verify_token(body["token"])
        assert (payload.id, payload.username, payload.role) == (2, "buyer_alfa", UserRole.BUYER)

    def test_refresh_with_invalid_token_returns_403(self, make_client):
        client = make_client(make_mock_session())

        resp = client.post("/api/auth/refresh", headers={"Authorization": "Bearer x.y.z"})
        assert resp.status_code == 403
