"""
Tests for authentication and user endpoints.
"""
from tripjournal.tests.helpers import PASSWORD, signup_and_login


def test_signup(client):
    """Test user signup."""
    response = client.post(
        "/api/auth/signup",
        json={
            "username": "testuser",
            "email": "test@example.com",
            "password": "testpassword123"
        }
    )
    assert response.status_code == 201
    body = response.json()
    assert body["username"] == "testuser"
    assert body["immich_configured"] is False
    assert "hashed_password" not in body


def test_signup_duplicate_username(client):
    """Test signup with a username that is taken."""
    signup_and_login(client, "testuser")
    response = client.post(
        "/api/auth/signup",
        json={"username": "testuser", "email": "other@example.com", "password": PASSWORD}
    )
    assert response.status_code == 400


def test_login(client):
    """Test user login."""
    client.post(
        "/api/auth/signup",
        json={
            "username": "testuser2",
            "email": "test2@example.com",
            "password": "testpassword123"
        }
    )

    response = client.post(
        "/api/auth/login",
        json={
            "username": "testuser2",
            "password": "testpassword123"
        }
    )
    assert response.status_code == 200
    assert "access_token" in response.json()


def test_login_invalid_credentials(client):
    """Test login with invalid credentials."""
    response = client.post(
        "/api/auth/login",
        json={
            "username": "nonexistent",
            "password": "wrongpassword"
        }
    )
    assert response.status_code == 401


def test_protected_route_requires_token(client):
    assert client.get("/api/users/me").status_code == 401
    response = client.get("/api/users/me", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


def test_logout(client, alice):
    response = client.post("/api/auth/logout", headers=alice)
    assert response.status_code == 200
    assert response.json()["message"] == "Logged out successfully"


def test_update_current_user(client, alice):
    response = client.put(
        "/api/users/me",
        json={"timezone": "Europe/Paris", "password": "anotherpassword"},
        headers=alice
    )
    assert response.status_code == 200
    assert response.json()["timezone"] == "Europe/Paris"

    response = client.post("/api/auth/login", json={"username": "alice", "password": "anotherpassword"})
    assert response.status_code == 200


def test_immich_settings_require_url_and_key(client, alice):
    response = client.put(
        "/api/users/me/immich",
        json={"immich_api_url": "https://photos.example.com"},
        headers=alice
    )
    assert response.status_code == 400

    response = client.put(
        "/api/users/me/immich",
        json={"immich_api_url": "https://photos.example.com/", "immich_api_key": "secret"},
        headers=alice
    )
    assert response.status_code == 200
    assert response.json()["immich_configured"] is True

    response = client.put(
        "/api/users/me/immich",
        json={"immich_api_url": "", "immich_api_key": ""},
        headers=alice
    )
    assert response.json()["immich_configured"] is False
