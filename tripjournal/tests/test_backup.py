"""
Tests for backup export and restore.
"""
from tripjournal.core.exceptions import ValidationError
from tripjournal.services import restore_service
from tripjournal.tests.helpers import create_album, create_location, create_trip, link_photo


def build_trip(client, headers):
    trip = create_trip(client, headers, title="Portugal", start_date="2024-05-01", end_date="2024-05-10")
    tag = client.post("/api/tags", json={"name": "europe"}, headers=headers).json()
    client.post(f"/api/trips/{trip['id']}/tags", json={"tag_id": tag["id"]}, headers=headers)

    lisbon = create_location(client, headers, trip["id"], name="Lisbon", latitude=38.72, longitude=-9.14)
    porto = create_location(client, headers, trip["id"], name="Porto", latitude=41.15, longitude=-8.61)
    first = link_photo(client, headers, trip["id"], "asset-1")
    second = link_photo(client, headers, trip["id"], "asset-2")
    album = create_album(client, headers, trip["id"], name="Best", cover_photo_id=second["id"])
    client.post(f"/api/albums/{album['id']}/photos", json={"photo_ids": [first["id"], second["id"]]}, headers=headers)

    client.post("/api/activities", json={"trip_id": trip["id"], "name": "Tram 28", "location_id": lisbon["id"]},
                headers=headers)
    client.post("/api/lodging", json={"trip_id": trip["id"], "name": "Casa", "location_id": porto["id"]},
                headers=headers)
    client.post("/api/transportation", json={"trip_id": trip["id"], "type": "train",
                                             "from_location_id": lisbon["id"], "to_location_id": porto["id"]},
                headers=headers)
    client.post("/api/journal", json={"trip_id": trip["id"], "content": "Pastéis", "location_id": lisbon["id"]},
                headers=headers)
    sam = client.post("/api/companions", json={"name": "Sam"}, headers=headers).json()
    client.post("/api/companions/link", json={"trip_id": trip["id"], "companion_id": sam["id"]}, headers=headers)
    return trip


def test_export_contains_everything(client, alice, bob):
    build_trip(client, alice)
    create_trip(client, bob, title="Not mine")

    response = client.get("/api/backup", headers=alice)
    assert response.status_code == 200
    assert "attachment" in response.headers["content-disposition"]

    backup = response.json()
    assert backup["version"] == "1.0.0"
    assert backup["user"]["username"] == "alice"
    assert "immich_api_key" not in backup["user"]
    assert [t["name"] for t in backup["tags"]] == ["europe"]
    assert [c["name"] for c in backup["companions"]] == ["Sam"]

    [trip] = backup["trips"]
    assert trip["title"] == "Portugal"
    assert trip["tags"] == ["europe"]
    assert trip["companions"] == ["Sam"]
    assert {loc["name"] for loc in trip["locations"]} == {"Lisbon", "Porto"}
    assert len(trip["photos"]) == 2
    assert len(trip["albums"][0]["photo_ids"]) == 2
    assert len(trip["activities"]) == 1
    assert len(trip["lodging"]) == 1
    assert trip["transportation"][0]["type"] == "train"
    assert len(trip["journal_entries"]) == 1


def test_restore_replaces_data_and_remaps_ids(client, alice):
    build_trip(client, alice)
    backup = client.get("/api/backup", headers=alice).json()
    create_trip(client, alice, title="Made after the backup")

    response = client.post("/api/backup/restore", json={"data": backup}, headers=alice)
    assert response.status_code == 200, response.text
    result = response.json()["data"]
    assert result["success"] is True
    assert result["stats"]["trips"] == 1
    assert result["stats"]["locations"] == 2
    assert result["stats"]["photos"] == 2
    assert result["stats"]["albums"] == 1
    assert result["stats"]["tags"] == 1
    assert result["stats"]["companions"] == 1

    trips = client.get("/api/trips", headers=alice).json()
    assert [t["title"] for t in trips["items"]] == ["Portugal"]
    trip = trips["items"][0]
    assert [t["name"] for t in trip["tags"]] == ["europe"]
    companions = client.get(f"/api/companions/trips/{trip['id']}", headers=alice).json()
    assert [c["name"] for c in companions] == ["Sam"]

    locations = {loc["id"]: loc["name"] for loc in
                 client.get(f"/api/locations/trip/{trip['id']}", headers=alice).json()["items"]}
    activity = client.get(f"/api/activities/trip/{trip['id']}", headers=alice).json()["items"][0]
    assert locations[activity["location_id"]] == "Lisbon"
    leg = client.get(f"/api/transportation/trip/{trip['id']}", headers=alice).json()["items"][0]
    assert locations[leg["from_location_id"]] == "Lisbon"
    assert locations[leg["to_location_id"]] == "Porto"

    albums = client.get(f"/api/albums/trip/{trip['id']}", headers=alice).json()
    assert albums["unsorted_count"] == 0
    album = albums["albums"][0]
    assert album["photo_count"] == 2
    assert album["cover_photo"]["immich_asset_id"] == "asset-2"


def test_restore_without_clearing_and_without_photos(client, alice):
    build_trip(client, alice)
    backup = client.get("/api/backup", headers=alice).json()

    response = client.post(
        "/api/backup/restore",
        json={"data": backup, "options": {"clear_existing_data": False, "import_photos": False}},
        headers=alice
    )
    stats = response.json()["data"]["stats"]
    assert stats["photos"] == 0
    assert stats["albums"] == 0
    # Existing tag is reused by name
    assert stats["tags"] == 0
    assert client.get("/api/trips", headers=alice).json()["total"] == 2


def test_restore_into_another_account(client, alice, bob):
    build_trip(client, alice)
    backup = client.get("/api/backup", headers=alice).json()

    response = client.post("/api/backup/restore", json={"data": backup}, headers=bob)
    assert response.status_code == 200
    assert client.get("/api/trips", headers=bob).json()["total"] == 1
    assert client.get("/api/trips", headers=alice).json()["total"] == 1


def test_restore_rejects_unknown_version(client, alice):
    build_trip(client, alice)
    backup = client.get("/api/backup", headers=alice).json()
    backup["version"] = "0.9.0"

    response = client.post("/api/backup/restore", json={"data": backup}, headers=alice)
    assert response.status_code == 400
    assert client.get("/api/trips", headers=alice).json()["total"] == 1


def test_failed_restore_leaves_data_untouched(client, alice, monkeypatch):
    trip = build_trip(client, alice)
    backup = client.get("/api/backup", headers=alice).json()

    def broken(*args, **kwargs):
        raise ValidationError("Corrupt trip in backup")

    monkeypatch.setattr(restore_service, "_restore_trip", broken)
    response = client.post("/api/backup/restore", json={"data": backup}, headers=alice)
    assert response.status_code == 400

    trips = client.get("/api/trips", headers=alice).json()
    assert [t["id"] for t in trips["items"]] == [trip["id"]]
    assert len(client.get(f"/api/photos/trip/{trip['id']}", headers=alice).json()["items"]) == 2
    assert [t["name"] for t in client.get("/api/tags", headers=alice).json()] == ["europe"]
    assert [c["name"] for c in client.get("/api/companions", headers=alice).json()] == ["Sam"]
