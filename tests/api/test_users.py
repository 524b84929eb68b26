# tests/api/test_users.py
from fastapi import status

from docuvoice.api import deps
from docuvoice.errors import UnauthorizedError


class StubAuthenticator:
    def verify(self, token):
        if token != "good-token":
            raise UnauthorizedError("Invalid session token")
        return {"sub": "user_42"}


def test_sync_and_read_current_user(client):
    response = client.post("/api/users/me", json={"name": "Ada", "email": "ada@example.com"})
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["id"] == "user_1"

    response = client.get("/api/users/me")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["user_id"] == "user_1"
    assert data["user"]["subscription"] is False


def test_current_user_before_sync(client):
    response = client.get("/api/users/me")

    assert response.json() == {"user_id": "user_1", "user": None}


def test_update_subscription(client):
    client.post("/api/users/me", json={"name": "Ada", "email": "ada@example.com"})

    response = client.put("/api/users/me/subscription", json={"subscription": True})

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["subscription"] is True


def test_update_subscription_unknown_user(client):
    response = client.put("/api/users/me/subscription", json={"subscription": True})

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_anonymous_request_is_rejected(anon_client):
    response = anon_client.get("/api/users/me")

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"error": "Unauthorized"}


def test_bearer_token_identifies_user(anon_client, monkeypatch):
    monkeypatch.setattr(deps, "clerk_authenticator", StubAuthenticator())

    response = anon_client.get("/api/users/me", headers={"Authorization": "Bearer good-token"})

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["user_id"] == "user_42"


def test_session_cookie_identifies_user(anon_client, monkeypatch):
    monkeypatch.setattr(deps, "clerk_authenticator", StubAuthenticator())
    anon_client.cookies.set("__session", "good-token")

    response = anon_client.get("/api/users/me")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["user_id"] == "user_42"


def test_invalid_token_is_rejected(anon_client, monkeypatch):
    monkeypatch.setattr(deps, "clerk_authenticator", StubAuthenticator())

    response = anon_client.get("/api/users/me", headers={"Authorization": "Bearer forged"})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["error"] == "Invalid session token"


def test_token_rejected_when_auth_not_configured(anon_client):
    response = anon_client.get("/api/users/me", headers={"Authorization": "Bearer anything"})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["error"] == "Authentication is not configured"
