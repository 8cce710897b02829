"""
Tests for authentication API and AuthService
"""
from datetime import timedelta

from punchlines.models import Session as UserSession
from punchlines.services.auth_service import AuthService
from punchlines.utils.datetime_utils import utc_now

CREDS = {"email": "Carol@Example.com", "password": "s3cret-pass"}


def test_register_login_me_logout(client):
    r = client.post("/api/auth/register", json=CREDS)
    assert r.status_code == 201
    assert r.json()["email"] == "carol@example.com"

    r = client.post("/api/auth/login", json=CREDS)
    assert r.status_code == 200
    body = r.json()
    assert body["token"]
    assert body["user"]["last_login"] is not None
    assert client.cookies.get("session_token") == body["token"]

    r = client.get("/api/auth/me")
    assert r.status_code == 200
    assert r.json()["email"] == "carol@example.com"

    r = client.post("/api/auth/logout")
    assert r.status_code == 204

    client.cookies.clear()
    r = client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['token']}"})
    assert r.status_code == 401


def test_register_duplicate_email(client):
    assert client.post("/api/auth/register", json=CREDS).status_code == 201
    r = client.post("/api/auth/register", json={**CREDS, "email": "carol@example.com"})
    assert r.status_code == 400


def test_register_rejects_short_password(client):
    r = client.post("/api/auth/register", json={"email": "d@example.com", "password": "short"})
    assert r.status_code == 422


def test_login_wrong_password(client, user):
    r = client.post("/api/auth/login", json={"email": user.email, "password": "wrong-password"})
    assert r.status_code == 401


def test_me_requires_auth(client):
    assert client.get("/api/auth/me").status_code == 401


def test_expired_session_is_deleted(db, user):
    service = AuthService(db)
    session = service.create_session(user.id)
    session.expires_at = utc_now() - timedelta(minutes=1)
    db.commit()

    assert service.validate_session(session.token) is None
    assert db.query(UserSession).count() == 0


def test_inactive_user_cannot_authenticate(db, user):
    service = AuthService(db)
    token = service.create_session(user.id).token
    user.is_active = False
    db.commit()

    assert service.authenticate(user.email, "correct-horse") is None
    assert service.validate_session(token) is None


def test_cleanup_expired_sessions(db, user):
    service = AuthService(db)
    live = service.create_session(user.id)
    stale = service.create_session(user.id)
    stale.expires_at = utc_now() - timedelta(hours=1)
    db.commit()

    assert service.cleanup_expired_sessions() == 1
    assert [s.id for s in db.query(UserSession).all()] == [live.id]
