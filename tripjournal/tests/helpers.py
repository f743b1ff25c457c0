"""
Request helpers shared by the API tests.
"""
from fastapi.testclient import TestClient

PASSWORD = "testpassword123"


def signup_and_login(client: TestClient, username: str) -> dict:
    """Create a user and return auth headers for it."""
    response = client.post(
        "/api/auth/signup",
        json={"username": username, "email": f"{username}@example.com", "password": PASSWORD}
    )
    assert response.status_code == 201, response.text
    response = client.post("/api/auth/login", json={"username": username, "password": PASSWORD})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def create_trip(client: TestClient, headers: dict, **fields) -> dict:
    payload = {"title": "Test Trip", **fields}
    response = client.post("/api/trips", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def create_location(client: TestClient, headers: dict, trip_id: int, **fields) -> dict:
    payload = {"trip_id": trip_id, "name": "Somewhere", **fields}
    response = client.post("/api/locations", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def link_photo(client: TestClient, headers: dict, trip_id: int, asset_id: str, **fields) -> dict:
    payload = {"trip_id": trip_id, "immich_asset_id": asset_id, **fields}
    response = client.post("/api/photos/immich", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def create_album(client: TestClient, headers: dict, trip_id: int, **fields) -> dict:
    payload = {"trip_id": trip_id, "name": "Album", **fields}
    response = client.post("/api/albums", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def add_collaborator(client: TestClient, headers: dict, trip_id: int, username: str,
                     permission_level: str = "view") -> dict:
    response = client.post(
        f"/api/trips/{trip_id}/collaborators",
        json={"username": username, "permission_level": permission_level},
        headers=headers
    )
    assert response.status_code == 201, response.text
    return response.json()


def configure_immich(client: TestClient, headers: dict) -> None:
    response = client.put(
        "/api/users/me/immich",
        json={"immich_api_url": "https://immich.test/", "immich_api_key": "secret"},
        headers=headers
    )
    assert response.status_code == 200, response.text
