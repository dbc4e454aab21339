from fastapi.testclient import TestClient

from app.main import app
from conftest import ensure_user, login_headers

client = TestClient(app)


def test_login_success_and_me():
    ensure_user("auth@test.local", "pass123")
    headers = login_headers(client, "auth@test.local", "pass123")
    me = client.get("/auth/me", headers=headers)
    assert me.status_code == 200
    body = me.json()
    assert body["email"] == "auth@test.local"
    assert body["role"] == "admin"
    assert body["lastLogin"] is not None


def test_login_wrong_password():
    ensure_user("auth@test.local", "pass123")
    resp = client.post("/auth/login", data={"username": "auth@test.local", "password": "nope"})
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "invalid_credentials"


def test_invalid_token_rejected():
    resp = client.get("/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401
    assert resp.json()["error"]["code"] == "invalid_token"


def test_admin_requires_auth():
    resp = client.get("/admin/users")
    assert resp.status_code in (401, 403)
