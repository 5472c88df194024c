"""
HTTP-level tests for POST /usuarios and POST /login.
"""

import pytest
from unittest.mock import AsyncMock, patch

from auth.jwt import verify_token
from auth.password import verify_password

ANA = {"name": "Ana", "email": "ana@x.com", "password": "secret1"}


def _register(client, **overrides):
    return client.post("/usuarios", json={**ANA, **overrides})


def _login(client, email=ANA["email"], password=ANA["password"]):
    return client.post("/login", json={"email": email, "password": password})


class TestRegister:
    def test_created(self, client):
        resp = _register(client)
        assert resp.status_code == 201
        body = resp.json()
        assert body["message"] == "User created successfully!"
        assert body["user"]["name"] == "Ana"
        assert body["user"]["email"] == "ana@x.com"
        assert isinstance(body["user"]["id"], int)

    def test_stored_hash_is_not_plaintext_and_verifies(self, client):
        user = _register(client).json()["user"]
        assert user["password_hash"] != "secret1"
        assert verify_password("secret1", user["password_hash"])

    def test_duplicate_email_rejected_first_record_kept(self, client, settings):
        first = _register(client).json()["user"]
        resp = _register(client, name="Impostor", password="other")
        assert resp.status_code == 400
        assert resp.json()["error"]

        login = _login(client)
        assert login.status_code == 200
        claims = verify_token(login.json()["token"], settings.jwt_secret)
        assert claims["id"] == first["id"]
        assert _login(client, password="other").status_code == 401

    @pytest.mark.parametrize("field", ["name", "password"])
    def test_empty_field_rejected_without_creating(self, client, field):
        resp = _register(client, **{field: ""})
        assert resp.status_code == 400
        assert resp.json() == {"error": "All fields are required"}
        assert _login(client).status_code == 404

    def test_empty_email_rejected(self, client):
        resp = _register(client, email="")
        assert resp.status_code == 400
        assert resp.json() == {"error": "All fields are required"}

    def test_missing_field_rejected(self, client):
        resp = client.post("/usuarios", json={"name": "Ana", "email": "ana@x.com"})
        assert resp.status_code == 400
        assert "error" in resp.json()

    def test_malformed_json_is_400(self, client):
        resp = client.post(
            "/usuarios",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )
        assert resp.status_code == 400
        assert "error" in resp.json()

    def test_wrong_type_is_400(self, client):
        resp = _register(client, name=42)
        assert resp.status_code == 400
        assert "error" in resp.json()

    def test_unexpected_store_failure_is_400(self, client):
        with patch("auth.routes.create_user", new=AsyncMock(side_effect=RuntimeError("db down"))):
            resp = _register(client)
        assert resp.status_code == 400
        assert resp.json() == {"error": "db down"}


class TestLogin:
    def test_success_returns_token_with_claims(self, client, settings):
        user = _register(client).json()["user"]
        resp = _login(client)
        assert resp.status_code == 200
        body = resp.json()
        assert body["message"] == "Login successful!"
        assert body["token"]
        claims = verify_token(body["token"], settings.jwt_secret)
        assert claims["id"] == user["id"]
        assert claims["email"] == "ana@x.com"
        assert claims["exp"] - claims["iat"] == 3600

    def test_wrong_password_is_401(self, client):
        _register(client)
        resp = _login(client, password="wrong")
        assert resp.status_code == 401
        assert resp.json() == {"message": "Invalid password"}

    def test_unknown_email_is_404(self, client):
        resp = _login(client, email="nobody@x.com", password="x")
        assert resp.status_code == 404
        assert resp.json() == {"message": "User not found"}

    def test_missing_password_is_400(self, client):
        resp = client.post("/login", json={"email": "ana@x.com"})
        assert resp.status_code == 400
        assert "error" in resp.json()

    def test_signing_failure_is_400(self, client):
        _register(client)
        client.app.state.ctx.settings.jwt_secret = ""
        resp = _login(client)
        assert resp.status_code == 400
        assert "secret" in resp.json()["error"]


class TestExampleFlow:
    def test_register_then_login_variants(self, client):
        assert _register(client).status_code == 201
        ok = _login(client, "ana@x.com", "secret1")
        assert ok.status_code == 200 and ok.json()["token"]
        assert _login(client, "ana@x.com", "wrong").status_code == 401
        assert _login(client, "nobody@x.com", "x").status_code == 404


class TestCors:
    def test_preflight_allows_configured_origin(self, client, settings):
        origin = settings.cors_origins[0]
        resp = client.options(
            "/login",
            headers={
                "Origin": origin,
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )
        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == origin

    def test_timer_header(self, client):
        resp = _login(client, email="nobody@x.com", password="x")
        assert "x-process-time" in resp.headers
