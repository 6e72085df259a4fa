from finboard.api import deps
from finboard.main import app


def _real_auth():
    app.dependency_overrides.pop(deps.get_current_user, None)
    app.dependency_overrides.pop(deps.get_current_user_optional, None)


def test_signup_login_and_me(api):
    _real_auth()

    created = api.post(
        "/api/auth/signup",
        json={"email": "rita@finboard.local", "name": "Rita", "password": "s3cret"},
    )
    assert created.status_code == 201, created.text
    assert created.json()["role"]["name"] == "comercial"

    bad = api.post(
        "/api/auth/token", data={"username": "rita@finboard.local", "password": "wrong"}
    )
    assert bad.status_code == 401

    token = api.post(
        "/api/auth/token", data={"username": "rita@finboard.local", "password": "s3cret"}
    ).json()["access_token"]

    me = api.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["email"] == "rita@finboard.local"
    assert me.json()["role"] == "comercial"


def test_signup_rejects_duplicates_and_role_escalation(api):
    _real_auth()
    payload = {"email": "ze@finboard.local", "name": "Ze", "password": "s3cret"}

    assert api.post("/api/auth/signup", json={**payload, "role": "admin"}).status_code == 400
    assert api.post("/api/auth/signup", json=payload).status_code == 201
    assert api.post("/api/auth/signup", json=payload).status_code == 400


def test_health(api):
    body = api.get("/api/health").json()

    assert body["status"] == "ok"
    assert body["environment"] == "test"
    assert "uptime_seconds" in body
