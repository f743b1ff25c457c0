"""
Tests for trip, tag and collaborator endpoints.
"""
from tripjournal.tests.helpers import add_collaborator, create_trip


def test_create_trip_defaults(client, alice):
    trip = create_trip(client, alice, title="Lisbon", start_date="2024-05-01", end_date="2024-05-07")
    assert trip["status"] == "Planning"
    assert trip["privacy_level"] == "Private"
    assert trip["tags"] == []


def test_trip_dates_validated(client, alice):
    response = client.post(
        "/api/trips",
        json={"title": "Backwards", "start_date": "2024-05-07", "end_date": "2024-05-01"},
        headers=alice
    )
    assert response.status_code == 400

    trip = create_trip(client, alice, start_date="2024-05-01")
    response = client.put(f"/api/trips/{trip['id']}", json={"end_date": "2024-04-01"}, headers=alice)
    assert response.status_code == 400


def test_update_rejects_null_title(client, alice):
    trip = create_trip(client, alice)
    response = client.put(f"/api/trips/{trip['id']}", json={"title": None}, headers=alice)
    assert response.status_code == 400


def test_list_trips_filters(client, alice, bob):
    create_trip(client, alice, title="Japan Spring", status="Planned")
    create_trip(client, alice, title="Iceland", status="Dream")
    create_trip(client, bob, title="Bob's trip")

    all_trips = client.get("/api/trips", headers=alice).json()
    assert all_trips["total"] == 2

    dreams = client.get("/api/trips?status=Dream", headers=alice).json()
    assert [t["title"] for t in dreams["items"]] == ["Iceland"]

    search = client.get("/api/trips?search=japan", headers=alice).json()
    assert [t["title"] for t in search["items"]] == ["Japan Spring"]


def test_shared_trips_listing(client, alice, bob):
    trip = create_trip(client, alice, privacy_level="Shared")
    add_collaborator(client, alice, trip["id"], "bob")

    shared = client.get("/api/trips/shared", headers=bob).json()
    assert shared["total"] == 1
    assert shared["items"][0]["id"] == trip["id"]


def test_trip_tags(client, alice, bob):
    trip = create_trip(client, alice)
    tag = client.post("/api/tags", json={"name": "beach", "color": "#00AAFF"}, headers=alice).json()

    response = client.post(f"/api/trips/{trip['id']}/tags", json={"tag_id": tag["id"]}, headers=alice)
    assert response.status_code == 200
    assert [t["name"] for t in response.json()["tags"]] == ["beach"]

    # Applying twice keeps one assignment
    response = client.post(f"/api/trips/{trip['id']}/tags", json={"tag_id": tag["id"]}, headers=alice)
    assert len(response.json()["tags"]) == 1

    bob_tag = client.post("/api/tags", json={"name": "mine"}, headers=bob).json()
    response = client.post(f"/api/trips/{trip['id']}/tags", json={"tag_id": bob_tag["id"]}, headers=alice)
    assert response.status_code == 404

    assert client.delete(f"/api/trips/{trip['id']}/tags/{tag['id']}", headers=alice).status_code == 200
    assert client.delete(f"/api/trips/{trip['id']}/tags/{tag['id']}", headers=alice).status_code == 404


def test_add_collaborator_rules(client, alice, bob, carol):
    trip = create_trip(client, alice, privacy_level="Shared")

    response = client.post(
        f"/api/trips/{trip['id']}/collaborators",
        json={"username": "alice", "permission_level": "view"},
        headers=alice
    )
    assert response.status_code == 400

    response = client.post(
        f"/api/trips/{trip['id']}/collaborators",
        json={"username": "nobody", "permission_level": "view"},
        headers=alice
    )
    assert response.status_code == 404

    collaborator = add_collaborator(client, alice, trip["id"], "bob", "admin")
    assert collaborator["username"] == "bob"
    assert collaborator["permission_level"] == "admin"

    response = client.post(
        f"/api/trips/{trip['id']}/collaborators",
        json={"username": "bob", "permission_level": "view"},
        headers=alice
    )
    assert response.status_code == 400

    # An admin collaborator may add others but not grant admin
    response = client.post(
        f"/api/trips/{trip['id']}/collaborators",
        json={"username": "carol", "permission_level": "admin"},
        headers=bob
    )
    assert response.status_code == 403
    add_collaborator(client, bob, trip["id"], "carol", "edit")

    listing = client.get(f"/api/trips/{trip['id']}/collaborators", headers=carol).json()
    assert {c["username"] for c in listing} == {"bob", "carol"}


def test_update_and_remove_collaborator(client, alice, bob, carol):
    trip = create_trip(client, alice, privacy_level="Shared")
    bob_collab = add_collaborator(client, alice, trip["id"], "bob", "view")
    carol_collab = add_collaborator(client, alice, trip["id"], "carol", "view")

    response = client.put(
        f"/api/trips/{trip['id']}/collaborators/{bob_collab['user_id']}",
        json={"permission_level": "edit"},
        headers=alice
    )
    assert response.json()["permission_level"] == "edit"

    # A view collaborator cannot remove others but can leave
    response = client.delete(
        f"/api/trips/{trip['id']}/collaborators/{bob_collab['user_id']}", headers=carol
    )
    assert response.status_code == 403
    response = client.delete(
        f"/api/trips/{trip['id']}/collaborators/{carol_collab['user_id']}", headers=carol
    )
    assert response.status_code == 200
    assert client.get(f"/api/trips/{trip['id']}", headers=carol).status_code == 403


def test_title_search_matches_wildcards_literally(client, alice):
    create_trip(client, alice, title="50% off Lisbon")
    create_trip(client, alice, title="500 miles north")
    create_trip(client, alice, title="road_trip")
    create_trip(client, alice, title="roadXtrip")

    percent = client.get("/api/trips", params={"search": "50%"}, headers=alice).json()
    assert [t["title"] for t in percent["items"]] == ["50% off Lisbon"]

    underscore = client.get("/api/trips", params={"search": "d_t"}, headers=alice).json()
    assert [t["title"] for t in underscore["items"]] == ["road_trip"]


def test_collaborator_can_leave_trip_made_private(client, alice, bob):
    trip = create_trip(client, alice, privacy_level="Shared")
    collaborator = add_collaborator(client, alice, trip["id"], "bob", "view")
    client.put(f"/api/trips/{trip['id']}", json={"privacy_level": "Private"}, headers=alice)
    assert client.get(f"/api/trips/{trip['id']}", headers=bob).status_code == 403

    response = client.delete(
        f"/api/trips/{trip['id']}/collaborators/{collaborator['user_id']}", headers=bob
    )
    assert response.status_code == 200
    assert client.get(f"/api/trips/{trip['id']}/collaborators", headers=alice).json() == []

    # Not a collaborator any more
    response = client.delete(
        f"/api/trips/{trip['id']}/collaborators/{collaborator['user_id']}", headers=bob
    )
    assert response.status_code == 404
