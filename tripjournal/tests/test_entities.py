"""
Tests for locations, activities, lodging and journal entries.
"""
from tripjournal.tests.helpers import create_location, create_trip


def test_location_crud(client, alice):
    trip = create_trip(client, alice)
    location = create_location(client, alice, trip["id"], name="Alfama", latitude=38.71, longitude=-9.13)
    assert location["latitude"] == 38.71

    response = client.put(f"/api/locations/{location['id']}", json={"notes": "Fado at night"}, headers=alice)
    assert response.json()["notes"] == "Fado at night"
    assert response.json()["name"] == "Alfama"

    response = client.put(f"/api/locations/{location['id']}", json={"name": None}, headers=alice)
    assert response.status_code == 400

    response = client.post(
        "/api/locations",
        json={"trip_id": trip["id"], "name": "Nowhere", "latitude": 120},
        headers=alice
    )
    assert response.status_code == 422


def test_activity_location_must_belong_to_trip(client, alice):
    trip = create_trip(client, alice)
    other = create_trip(client, alice, title="Other")
    foreign = create_location(client, alice, other["id"])
    own = create_location(client, alice, trip["id"], name="Museum")

    response = client.post(
        "/api/activities",
        json={"trip_id": trip["id"], "name": "Tour", "location_id": foreign["id"]},
        headers=alice
    )
    assert response.status_code == 400

    response = client.post(
        "/api/activities",
        json={"trip_id": trip["id"], "name": "Tour", "location_id": own["id"], "all_day": True},
        headers=alice
    )
    assert response.status_code == 201
    activity = response.json()
    assert activity["location"]["name"] == "Museum"
    assert activity["all_day"] is True

    response = client.put(f"/api/activities/{activity['id']}", json={"location_id": foreign["id"]}, headers=alice)
    assert response.status_code == 400


def test_lodging_stay_dates(client, alice):
    trip = create_trip(client, alice)
    response = client.post(
        "/api/lodging",
        json={"trip_id": trip["id"], "name": "Hotel", "check_in_date": "2024-05-05T15:00:00",
              "check_out_date": "2024-05-01T11:00:00"},
        headers=alice
    )
    assert response.status_code == 400

    response = client.post(
        "/api/lodging",
        json={"trip_id": trip["id"], "name": "Hotel", "type": "hostel",
              "check_in_date": "2024-05-01T15:00:00", "check_out_date": "2024-05-05T11:00:00"},
        headers=alice
    )
    assert response.status_code == 201
    lodging = response.json()
    assert lodging["type"] == "hostel"

    response = client.put(
        f"/api/lodging/{lodging['id']}", json={"check_out_date": "2024-04-30T11:00:00"}, headers=alice
    )
    assert response.status_code == 400


def test_journal_entries(client, alice):
    trip = create_trip(client, alice)
    response = client.post(
        "/api/journal",
        json={"trip_id": trip["id"], "title": "Day 1", "content": "Arrived late."},
        headers=alice
    )
    assert response.status_code == 201
    entry = response.json()
    assert entry["entry_type"] == "daily"
    assert entry["date"] is not None

    response = client.put(f"/api/journal/{entry['id']}", json={"content": None}, headers=alice)
    assert response.status_code == 400

    client.post(
        "/api/journal",
        json={"trip_id": trip["id"], "content": "Looking back", "entry_type": "trip"},
        headers=alice
    )
    page = client.get(f"/api/journal/trip/{trip['id']}", headers=alice).json()
    assert page["total"] == 2


def test_deleting_location_detaches_references(client, alice):
    trip = create_trip(client, alice)
    location = create_location(client, alice, trip["id"], latitude=1.0, longitude=1.0)

    activity = client.post(
        "/api/activities",
        json={"trip_id": trip["id"], "name": "Walk", "location_id": location["id"]},
        headers=alice
    ).json()
    lodging = client.post(
        "/api/lodging",
        json={"trip_id": trip["id"], "name": "Inn", "location_id": location["id"]},
        headers=alice
    ).json()
    entry = client.post(
        "/api/journal",
        json={"trip_id": trip["id"], "content": "Notes", "location_id": location["id"]},
        headers=alice
    ).json()
    leg = client.post(
        "/api/transportation",
        json={"trip_id": trip["id"], "type": "walk", "from_location_id": location["id"]},
        headers=alice
    ).json()

    assert client.delete(f"/api/locations/{location['id']}", headers=alice).status_code == 200
    assert client.get(f"/api/locations/{location['id']}", headers=alice).status_code == 404

    assert client.get(f"/api/activities/{activity['id']}", headers=alice).json()["location_id"] is None
    assert client.get(f"/api/lodging/{lodging['id']}", headers=alice).json()["location_id"] is None
    assert client.get(f"/api/journal/{entry['id']}", headers=alice).json()["location_id"] is None
    assert client.get(f"/api/transportation/{leg['id']}", headers=alice).json()["from_location_id"] is None


def test_deleting_trip_removes_children(client, alice):
    trip = create_trip(client, alice)
    location = create_location(client, alice, trip["id"])
    assert client.delete(f"/api/trips/{trip['id']}", headers=alice).status_code == 200
    assert client.get(f"/api/trips/{trip['id']}", headers=alice).status_code == 404
    assert client.get(f"/api/locations/{location['id']}", headers=alice).status_code == 404
