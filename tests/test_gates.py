from nums_api.core.db_status import DatabaseStatus
from nums_api.services.admin import revoke_admin
from nums_api.services.auth import create_access_token


def test_missing_token_is_401(client):
    response = client.get("/api/users/me")

    assert response.status_code == 401
    assert response.json()["errorCode"] == "MISSING_AUTH_TOKEN"


def test_garbage_token_is_401(client):
    response = client.get("/api/users/me", headers={"Authorization": "Bearer nope"})

    assert response.status_code == 401
    assert response.json()["errorCode"] == "TOKEN_VERIFICATION_FAILED"


def test_admin_route_checks_session_before_grant(client):
    response = client.get("/api/admin/users")

    assert response.status_code == 401
    assert response.json()["errorCode"] == "MISSING_AUTH_TOKEN"


def test_admin_route_rejects_regular_user(client, register):
    _, headers = register()

    response = client.get("/api/admin/users", headers=headers)

    assert response.status_code == 403
    assert response.json()["errorCode"] == "ADMIN_ACCESS_REQUIRED"


def test_upload_requires_admin(client, register, row):
    _, headers = register()

    response = client.post("/api/games/upload", json={"data": row(1)}, headers=headers)

    assert response.status_code == 403


def test_revoked_grant_loses_access(client, admin_headers):
    assert client.get("/api/admin/users", headers=admin_headers).status_code == 200

    assert revoke_admin("admin_user") is True
    assert revoke_admin("admin_user") is False

    assert client.get("/api/admin/users", headers=admin_headers).status_code == 403


def test_valid_token_for_unknown_account_is_not_admin(client):
    headers = {"Authorization": f"Bearer {create_access_token(999, 'ghost_user')}"}

    assert client.get("/api/admin/users", headers=headers).status_code == 403


def test_store_gate_comes_before_session_gate(client):
    DatabaseStatus.set_connected(False)

    response = client.get("/api/users/me")

    assert response.status_code == 503
    body = response.json()
    assert body["errorCode"] == "DB_UNAVAILABLE"
    assert body["endpoint"] == "/api/users/me"
    assert body["method"] == "GET"
