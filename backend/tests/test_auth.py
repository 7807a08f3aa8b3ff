"""Tests for registration, login and bearer-token access control."""
from datetime import timedelta

import jwt

from tests.conftest import auth_headers, register_user
from timemaster.config import settings
from timemaster.services.auth_service import create_access_token, decode_access_token


class TestRegister:

    def test_register_returns_token_and_public_user(self, client):
        data = register_user(client, name="Ana", email="Ana@X.com", password="abcd")
        assert data["token"]
        assert data["user"]["name"] == "Ana"
        assert data["user"]["email"] == "ana@x.com"
        assert set(data["user"]) == {"id", "name", "email"}

    def test_missing_fields(self, client):
        resp = client.post("/api/auth/register", json={"email": "a@b.c", "password": "abcd"})
        assert resp.status_code == 400
        assert "error" in resp.json()

    def test_blank_name(self, client):
        resp = client.post("/api/auth/register", json={"name": "  ", "email": "a@b.c", "password": "abcd"})
        assert resp.status_code == 400

    def test_password_too_short(self, client):
        resp = client.post("/api/auth/register", json={"name": "Ana", "email": "a@b.c", "password": "abc"})
        assert resp.status_code == 400
        assert "Password" in resp.json()["error"]

    def test_duplicate_email_is_case_insensitive(self, client):
        register_user(client, email="ana@x.com")
        resp = client.post("/api/auth/register", json={"name": "Other", "email": "ANA@x.com", "password": "abcd"})
        assert resp.status_code == 409
        assert resp.json()["error"]


class TestLogin:

    def test_round_trip_resolves_same_user(self, client):
        registered = register_user(client, name="Ana", email="Ana@X.com", password="abcd")
        resp = client.post("/api/auth/login", json={"email": "ana@x.com", "password": "abcd"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["user"] == registered["user"]
        assert decode_access_token(data["token"]).user_id == registered["user"]["id"]

        me = client.get("/api/auth/me", headers=auth_headers(data["token"]))
        assert me.status_code == 200
        assert me.json()["id"] == registered["user"]["id"]

    def test_wrong_password_is_401(self, client):
        register_user(client, email="ana@x.com", password="abcd")
        resp = client.post("/api/auth/login", json={"email": "ana@x.com", "password": "wrong"})
        assert resp.status_code == 401

    def test_unknown_email_is_401_not_404(self, client):
        register_user(client, email="ana@x.com", password="abcd")
        unknown = client.post("/api/auth/login", json={"email": "nobody@x.com", "password": "abcd"})
        wrong = client.post("/api/auth/login", json={"email": "ana@x.com", "password": "nope"})
        assert unknown.status_code == 401
        assert unknown.json() == wrong.json()

    def test_missing_fields(self, client):
        resp = client.post("/api/auth/login", json={"email": "ana@x.com"})
        assert resp.status_code == 400


class TestBearerGate:

    def test_missing_token(self, client):
        resp = client.get("/api/tasks")
        assert resp.status_code == 401
        assert resp.json() == {"error": "Missing token"}

    def test_garbage_token(self, client):
        resp = client.get("/api/tasks", headers=auth_headers("not-a-jwt"))
        assert resp.status_code == 401
        assert resp.json() == {"error": "Invalid or expired token"}

    def test_expired_token(self, client):
        user = register_user(client)["user"]
        token = create_access_token(user["id"], expires_delta=timedelta(seconds=-5))
        resp = client.get("/api/auth/me", headers=auth_headers(token))
        assert resp.status_code == 401

    def test_forged_signature(self, client):
        user = register_user(client)["user"]
        token = jwt.encode({"sub": str(user["id"])}, "someone-elses-secret", algorithm="HS256")
        resp = client.get("/api/auth/me", headers=auth_headers(token))
        assert resp.status_code == 401

    def test_token_expires_after_configured_days(self):
        token = create_access_token(7)
        claims = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
        assert claims["sub"] == "7"
        assert claims["exp"] - claims["iat"] == settings.TOKEN_EXPIRE_DAYS * 24 * 3600

    def test_me_for_unknown_user(self, client):
        token = create_access_token(9999)
        resp = client.get("/api/auth/me", headers=auth_headers(token))
        assert resp.status_code == 404
        assert resp.json()["error"]
