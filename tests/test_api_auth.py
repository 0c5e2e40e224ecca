from __future__ import annotations

from types import SimpleNamespace

import jwt
import pytest
from supabase import AuthError

from main import app
from services.auth import create_token, verify_token
from services.baas import get_auth_client, get_service_client
from conftest import USER_ID


class _Denied(AuthError):
    def __init__(self, message: str = "Invalid login credentials") -> None:
        Exception.__init__(self, message)
        self.message = message


def _session_response(user_id: str = USER_ID):
    return SimpleNamespace(
        user=SimpleNamespace(id=user_id),
        session=SimpleNamespace(access_token="access-abc", refresh_token="refresh-xyz"),
    )


class FakeAuth:
    def __init__(self, response=None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.calls: list[tuple[str, object]] = []
        self.admin = SimpleNamespace(sign_out=self._sign_out)

    def _answer(self, name, payload):
        self.calls.append((name, payload))
        if self.error:
            raise self.error
        return self.response

    def sign_up(self, creds):
        return self._answer("sign_up", creds)

    def sign_in_with_password(self, creds):
        return self._answer("sign_in", creds)

    def _sign_out(self, jwt_token, *a):
        return self._answer("sign_out", jwt_token)


@pytest.fixture
def fake_auth():
    fake = FakeAuth(response=_session_response())
    client = SimpleNamespace(auth=fake)
    app.dependency_overrides[get_auth_client] = lambda: client
    app.dependency_overrides[get_service_client] = lambda: client
    yield fake


CREDS = {"email": "ada@example.com", "password": "s3cret-pass"}


# ── tokens ──────────────────────────────────────────────────────────
def test_token_roundtrip():
    assert verify_token(create_token("abc")) == "abc"


def test_expired_token_rejected():
    with pytest.raises(jwt.ExpiredSignatureError):
        verify_token(create_token("abc", ttl_minutes=-1))


def test_protected_route_needs_bearer(client):
    assert client.get("/api/v1/profile").status_code == 401
    bad = {"Authorization": "Bearer not-a-jwt"}
    assert client.get("/api/v1/profile", headers=bad).status_code == 401


# ── sign-up ─────────────────────────────────────────────────────────
def test_signup_with_session_goes_to_profile_setup(client, fake_auth):
    r = client.post("/api/v1/auth/signup", json=CREDS)
    assert r.status_code == 201
    body = r.json()
    assert body["next"] == "profile-setup"
    assert body["access_token"] == "access-abc"
    assert fake_auth.calls == [("sign_up", CREDS)]


def test_signup_needing_confirmation(client, fake_auth):
    fake_auth.response = SimpleNamespace(user=SimpleNamespace(id=USER_ID), session=None)
    body = client.post("/api/v1/auth/signup", json=CREDS).json()
    assert body["next"] == "confirm-email"
    assert body["access_token"] is None


def test_signup_error_is_401(client, fake_auth):
    fake_auth.error = _Denied("User already registered")
    r = client.post("/api/v1/auth/signup", json=CREDS)
    assert r.status_code == 401
    assert r.json()["detail"] == "User already registered"


def test_signup_validates_body(client, fake_auth):
    r = client.post("/api/v1/auth/signup", json={"email": "ada@example.com", "password": "x"})
    assert r.status_code == 422
    assert fake_auth.calls == []


# ── sign-in ─────────────────────────────────────────────────────────
def test_login_without_profile_goes_to_setup(client, fake_auth):
    body = client.post("/api/v1/auth/login", json=CREDS).json()
    assert body["user_id"] == USER_ID
    assert body["next"] == "profile-setup"


def test_login_with_profile_goes_to_dashboard(client, fake_auth, auth):
    client.put(
        "/api/v1/profile",
        json={"name": "Ada", "age": 36, "gender": "female", "medical_conditions": ["none"]},
        headers=auth,
    )
    body = client.post("/api/v1/auth/login", json=CREDS).json()
    assert body["next"] == "dashboard"


def test_login_bad_credentials(client, fake_auth):
    fake_auth.error = _Denied()
    r = client.post("/api/v1/auth/login", json=CREDS)
    assert r.status_code == 401
    assert r.json()["detail"] == "Invalid login credentials"


def test_login_without_session(client, fake_auth):
    fake_auth.response = SimpleNamespace(user=None, session=None)
    assert client.post("/api/v1/auth/login", json=CREDS).status_code == 401


# ── sign-out ────────────────────────────────────────────────────────
def test_logout_revokes_bearer(client, fake_auth, auth):
    r = client.post("/api/v1/auth/logout", headers=auth)
    assert r.status_code == 204
    token = auth["Authorization"].split()[1]
    assert fake_auth.calls == [("sign_out", token)]
