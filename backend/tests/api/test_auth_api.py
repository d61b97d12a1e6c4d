from __future__ import annotations

from freezegun import freeze_time

from tests.factories.user import DEFAULT_PASSWORD, UserFactory
from tests.helpers.utils import bearer, login


def test_register_returns_user_and_tokens(client):
    resp = client.post(
        "/api/v1/auth/register",
        json={"email": "fresh@example.com", "password": "secret123", "username": "fresh"},
    )

    assert resp.status_code == 201
    data = resp.get_json()["data"]
    assert data["user"]["email"] == "fresh@example.com"
    assert data["user"]["role"] == "USER"
    assert data["tokens"]["token_type"] == "Bearer"
    assert data["tokens"]["access_expires_in"] == 900
    assert data["tokens"]["refresh_expires_in"] == 7 * 86400


def test_register_validation_error_is_problem_json(client):
    resp = client.post("/api/v1/auth/register", json={"email": "nope", "password": "123"})

    assert resp.status_code == 422
    assert resp.mimetype == "application/problem+json"
    body = resp.get_json()
    assert body["code"] == "validation_error"
    assert set(body["details"]["errors"]) == {"email", "password"}
    assert body["request_id"] == resp.headers["X-Request-ID"]


def test_register_duplicate_email_conflicts(client):
    UserFactory(email="dup@example.com")
    resp = client.post("/api/v1/auth/register", json={"email": "dup@example.com", "password": "secret123"})
    assert resp.status_code == 409


def test_login_failure_is_401(client):
    user = UserFactory()
    resp = client.post("/api/v1/auth/login", json={"email": user.email, "password": "wrong-one"})
    assert resp.status_code == 401
    assert resp.get_json()["detail"] == "Invalid email or password"


def test_refresh_rotation_and_replay(client):
    user = UserFactory()
    tokens = login(client, user.email, DEFAULT_PASSWORD)["tokens"]

    first = client.post("/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert first.status_code == 200
    rotated = first.get_json()["data"]
    assert rotated["refresh_token"] != tokens["refresh_token"]

    replay = client.post("/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert replay.status_code == 401
    assert replay.get_json()["detail"] == "Token refresh failed"


def test_new_access_token_works_on_protected_route(client):
    user = UserFactory()
    tokens = login(client, user.email, DEFAULT_PASSWORD)["tokens"]
    rotated = client.post("/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]}).get_json()["data"]

    resp = client.get("/api/v1/users/profile", headers=bearer(rotated["access_token"]))
    assert resp.status_code == 200
    assert resp.get_json()["data"]["id"] == user.id


def test_refresh_token_is_not_an_access_token(client):
    user = UserFactory()
    tokens = login(client, user.email, DEFAULT_PASSWORD)["tokens"]
    resp = client.get("/api/v1/users/profile", headers=bearer(tokens["refresh_token"]))
    assert resp.status_code == 401


def test_expired_access_token(client):
    user = UserFactory()
    with freeze_time("2026-01-01 00:00:00"):
        tokens = login(client, user.email, DEFAULT_PASSWORD)["tokens"]
    with freeze_time("2026-01-01 00:16:00"):
        resp = client.get("/api/v1/users/profile", headers=bearer(tokens["access_token"]))
    assert resp.status_code == 401
    assert resp.get_json()["code"] == "token_expired"


def test_logout_requires_access_token(client):
    resp = client.post("/api/v1/auth/logout", json={})
    assert resp.status_code == 401
    assert resp.mimetype == "application/problem+json"


def test_logout_one_session(client):
    user = UserFactory()
    phone = login(client, user.email, DEFAULT_PASSWORD)["tokens"]
    laptop = login(client, user.email, DEFAULT_PASSWORD)["tokens"]

    resp = client.post(
        "/api/v1/auth/logout",
        json={"refresh_token": phone["refresh_token"]},
        headers=bearer(phone["access_token"]),
    )
    assert resp.status_code == 200
    assert resp.get_json()["data"] == {"revoked": 1}

    dead = client.post("/api/v1/auth/refresh", json={"refresh_token": phone["refresh_token"]})
    alive = client.post("/api/v1/auth/refresh", json={"refresh_token": laptop["refresh_token"]})
    assert dead.status_code == 401
    assert alive.status_code == 200


def test_logout_everywhere(client):
    user = UserFactory()
    sessions = [login(client, user.email, DEFAULT_PASSWORD)["tokens"] for _ in range(2)]

    resp = client.post("/api/v1/auth/logout", headers=bearer(sessions[0]["access_token"]))
    assert resp.get_json()["data"] == {"revoked": 2}
    for tokens in sessions:
        assert client.post("/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]}).status_code == 401


def test_logout_with_another_users_token_leaves_it_alive(client):
    alice = UserFactory()
    mallory = UserFactory()
    victim = login(client, alice.email, DEFAULT_PASSWORD)["tokens"]
    own = login(client, mallory.email, DEFAULT_PASSWORD)["tokens"]

    resp = client.post(
        "/api/v1/auth/logout",
        json={"refresh_token": victim["refresh_token"]},
        headers=bearer(own["access_token"]),
    )
    assert resp.get_json()["data"] == {"revoked": 0}

    again = client.post("/api/v1/auth/refresh", json={"refresh_token": victim["refresh_token"]})
    assert again.status_code == 200


def test_oversized_refresh_token_is_rejected(client):
    user = UserFactory()
    tokens = login(client, user.email, DEFAULT_PASSWORD)["tokens"]
    huge = "x" * 5000

    refresh = client.post("/api/v1/auth/refresh", json={"refresh_token": huge})
    logout = client.post("/api/v1/auth/logout", json={"refresh_token": huge}, headers=bearer(tokens["access_token"]))

    assert refresh.status_code == 422
    assert logout.status_code == 422


def test_deactivated_user_cannot_refresh(client, session):
    user = UserFactory()
    tokens = login(client, user.email, DEFAULT_PASSWORD)["tokens"]
    user.is_active = False
    session.commit()

    resp = client.post("/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert resp.status_code == 401
