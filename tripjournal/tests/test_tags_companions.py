"""
Tests for tags and travel companions.
"""
from tripjournal.tests.helpers import add_collaborator, create_trip


def test_tag_lifecycle(client, alice, bob):
    response = client.post("/api/tags", json={"name": "hiking", "color": "#112233"}, headers=alice)
    assert response.status_code == 201
    tag = response.json()

    assert client.post("/api/tags", json={"name": "hiking"}, headers=alice).status_code == 400
    # Names are unique per user only
    assert client.post("/api/tags", json={"name": "hiking"}, headers=bob).status_code == 201
    assert client.post("/api/tags", json={"name": "bad", "color": "red"}, headers=alice).status_code == 422

    response = client.put(f"/api/tags/{tag['id']}", json={"name": "trekking"}, headers=alice)
    assert response.json()["name"] == "trekking"
    assert client.put(f"/api/tags/{tag['id']}", json={"name": "x"}, headers=bob).status_code == 404

    names = [t["name"] for t in client.get("/api/tags", headers=alice).json()]
    assert names == ["trekking"]


def test_deleting_tag_untags_trips(client, alice):
    trip = create_trip(client, alice)
    tag = client.post("/api/tags", json={"name": "city"}, headers=alice).json()
    client.post(f"/api/trips/{trip['id']}/tags", json={"tag_id": tag["id"]}, headers=alice)

    assert client.delete(f"/api/tags/{tag['id']}", headers=alice).status_code == 200
    assert client.get(f"/api/trips/{trip['id']}", headers=alice).json()["tags"] == []


def test_companions(client, alice, bob):
    me = client.post("/api/companions", json={"name": "Alice", "is_myself": True}, headers=alice).json()
    friend = client.post(
        "/api/companions",
        json={"name": "Sam", "email": "sam@example.com", "relationship_label": "friend"},
        headers=alice
    ).json()
    assert me["is_myself"] is True
    assert friend["is_myself"] is False

    # Only one companion can represent the user
    client.put(f"/api/companions/{friend['id']}", json={"is_myself": True}, headers=alice)
    listing = {c["name"]: c["is_myself"] for c in client.get("/api/companions", headers=alice).json()}
    assert listing == {"Alice": False, "Sam": True}

    assert client.get("/api/companions", headers=bob).json() == []
    assert client.delete(f"/api/companions/{friend['id']}", headers=bob).status_code == 404
    assert client.delete(f"/api/companions/{friend['id']}", headers=alice).status_code == 200
    assert client.post("/api/companions", json={"name": "X", "email": "nope"}, headers=alice).status_code == 422


def test_trip_companion_links(client, alice, bob):
    trip = create_trip(client, alice, privacy_level="Shared")
    add_collaborator(client, alice, trip["id"], "bob", permission_level="admin")
    sam = client.post("/api/companions", json={"name": "Sam"}, headers=alice).json()
    link = {"trip_id": trip["id"], "companion_id": sam["id"]}

    response = client.post("/api/companions/link", json=link, headers=alice)
    assert response.status_code == 201
    assert response.json()["name"] == "Sam"
    response = client.post("/api/companions/link", json=link, headers=alice)
    assert response.status_code == 400
    assert response.json()["detail"] == "Companion already linked to this trip"

    # Collaborators see the party but only the owner changes it
    listing = client.get(f"/api/companions/trips/{trip['id']}", headers=bob).json()
    assert [c["name"] for c in listing] == ["Sam"]
    assert client.delete(f"/api/companions/trips/{trip['id']}/companions/{sam['id']}",
                         headers=bob).status_code == 403

    bobs_friend = client.post("/api/companions", json={"name": "Kim"}, headers=bob).json()
    response = client.post("/api/companions/link", json={"trip_id": trip["id"], "companion_id": bobs_friend["id"]},
                           headers=alice)
    assert response.status_code == 404

    url = f"/api/companions/trips/{trip['id']}/companions/{sam['id']}"
    assert client.delete(url, headers=alice).status_code == 200
    assert client.delete(url, headers=alice).status_code == 404
    assert client.get(f"/api/companions/trips/{trip['id']}", headers=alice).json() == []


def test_new_trip_includes_myself(client, alice):
    client.post("/api/companions", json={"name": "Alice", "is_myself": True}, headers=alice)
    trip = create_trip(client, alice)

    listing = client.get(f"/api/companions/trips/{trip['id']}", headers=alice).json()
    assert [(c["name"], c["is_myself"]) for c in listing] == [("Alice", True)]


def test_deleting_companion_removes_it_from_trips(client, alice):
    trip = create_trip(client, alice)
    sam = client.post("/api/companions", json={"name": "Sam"}, headers=alice).json()
    client.post("/api/companions/link", json={"trip_id": trip["id"], "companion_id": sam["id"]}, headers=alice)

    assert client.delete(f"/api/companions/{sam['id']}", headers=alice).status_code == 200
    assert client.get(f"/api/companions/trips/{trip['id']}", headers=alice).json() == []
