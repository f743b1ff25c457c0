"""
Tests for transportation legs and route calculation.
"""
import json

import httpx
import pytest

from tripjournal.models.route_cache import RouteCache
from tripjournal.services.routing_service import Coordinates, RoutingService, estimate_duration
from tripjournal.models.transportation import DistanceSource
from tripjournal.tests.helpers import create_location, create_trip

NEW_YORK = Coordinates(40.7128, -74.0060)
LOS_ANGELES = Coordinates(34.0522, -118.2437)


def geojson(distance_m: float, duration_s: float) -> dict:
    return {
        "features": [{
            "geometry": {"type": "LineString", "coordinates": [[-74.006, 40.7128], [-118.2437, 34.0522]]},
            "properties": {"summary": {"distance": distance_m, "duration": duration_s}}
        }]
    }


class CountingHandler:
    """Routing API stub that records every request."""

    def __init__(self, response: httpx.Response):
        self.response = response
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response


@pytest.fixture
def routing_api():
    handler = CountingHandler(httpx.Response(200, json=geojson(4_490_000, 147_600)))
    client = httpx.Client(transport=httpx.MockTransport(handler))
    yield handler, RoutingService(client, api_key="test-key", api_url="https://routing.test/")
    client.close()


def test_haversine_distance():
    client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(500)))
    service = RoutingService(client, api_key="", api_url="https://routing.test")
    result = service.haversine_route(NEW_YORK, LOS_ANGELES)
    client.close()

    assert result.source == DistanceSource.HAVERSINE
    assert result.distance == pytest.approx(3935, abs=10)
    assert result.duration == pytest.approx(estimate_duration(result.distance, "driving-car"))


def test_falls_back_when_api_unreachable(db, routing_service):
    result = routing_service.calculate_route(db, NEW_YORK, LOS_ANGELES, "driving-car")
    assert result.source == DistanceSource.HAVERSINE
    assert result.distance == pytest.approx(3935, abs=10)
    assert db.query(RouteCache).count() == 0


def test_falls_back_without_api_key(db):
    def fail(request):
        raise AssertionError("routing API must not be called")

    client = httpx.Client(transport=httpx.MockTransport(fail))
    service = RoutingService(client, api_key="", api_url="https://routing.test")
    result = service.calculate_route(db, NEW_YORK, LOS_ANGELES, "driving-car")
    client.close()
    assert result.source == DistanceSource.HAVERSINE


@pytest.mark.parametrize("status_code", [401, 429, 500])
def test_falls_back_on_api_errors(db, status_code):
    client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(status_code)))
    service = RoutingService(client, api_key="k", api_url="https://routing.test")
    result = service.calculate_route(db, NEW_YORK, LOS_ANGELES, "driving-car")
    client.close()
    assert result.source == DistanceSource.HAVERSINE


def test_api_result_is_cached(db, routing_api):
    handler, service = routing_api

    first = service.calculate_route(db, NEW_YORK, LOS_ANGELES, "driving-car")
    db.commit()
    assert first.source == DistanceSource.API
    assert first.distance == pytest.approx(4490)
    assert first.duration == pytest.approx(2460)
    assert first.haversine_distance == pytest.approx(3935, abs=10)

    request = handler.requests[0]
    assert request.url.path == "/v2/directions/driving-car/geojson"
    assert request.headers["Authorization"] == "test-key"
    assert json.loads(request.content)["coordinates"] == [[-74.0060, 40.7128], [-118.2437, 34.0522]]

    # Within the cache tolerance no second request is made
    nearby = Coordinates(NEW_YORK.latitude + 0.0005, NEW_YORK.longitude)
    second = service.calculate_route(db, nearby, LOS_ANGELES, "driving-car")
    assert second.source == DistanceSource.API
    assert second.distance == pytest.approx(4490)
    assert len(handler.requests) == 1

    # A different profile is a different route
    service.calculate_route(db, NEW_YORK, LOS_ANGELES, "foot-walking")
    assert len(handler.requests) == 2


def test_transportation_route_computed_after_create(client, alice):
    trip = create_trip(client, alice)
    origin = create_location(client, alice, trip["id"], name="New York",
                             latitude=NEW_YORK.latitude, longitude=NEW_YORK.longitude)
    destination = create_location(client, alice, trip["id"], name="Los Angeles",
                                  latitude=LOS_ANGELES.latitude, longitude=LOS_ANGELES.longitude)

    response = client.post(
        "/api/transportation",
        json={
            "trip_id": trip["id"],
            "type": "car",
            "from_location_id": origin["id"],
            "to_location_id": destination["id"],
        },
        headers=alice
    )
    assert response.status_code == 201, response.text
    leg = response.json()
    assert leg["from_location"]["name"] == "New York"

    stored = client.get(f"/api/transportation/{leg['id']}", headers=alice).json()
    assert stored["distance_source"] == "haversine"
    assert stored["calculated_distance"] == pytest.approx(3935, abs=10)
    assert stored["calculated_duration"] == pytest.approx(stored["calculated_distance"] / 80 * 60)


def test_flight_uses_great_circle_distance(client, alice, routing_service, monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("flights are not routed")

    monkeypatch.setattr(routing_service, "_fetch_route", fail)
    trip = create_trip(client, alice)
    origin = create_location(client, alice, trip["id"], latitude=NEW_YORK.latitude, longitude=NEW_YORK.longitude)
    destination = create_location(client, alice, trip["id"],
                                  latitude=LOS_ANGELES.latitude, longitude=LOS_ANGELES.longitude)

    leg = client.post(
        "/api/transportation",
        json={"trip_id": trip["id"], "type": "flight",
              "from_location_id": origin["id"], "to_location_id": destination["id"]},
        headers=alice
    ).json()
    stored = client.get(f"/api/transportation/{leg['id']}", headers=alice).json()
    assert stored["distance_source"] == "haversine"
    assert stored["calculated_distance"] == pytest.approx(3935, abs=10)


def test_leg_without_coordinates_has_no_route(client, alice):
    trip = create_trip(client, alice)
    origin = create_location(client, alice, trip["id"], name="Unknown")
    leg = client.post(
        "/api/transportation",
        json={"trip_id": trip["id"], "type": "train", "from_location_id": origin["id"],
              "to_location_name": "Somewhere else"},
        headers=alice
    ).json()
    assert leg["calculated_distance"] is None
    assert leg["distance_source"] is None


def test_location_must_belong_to_trip(client, alice):
    trip = create_trip(client, alice)
    other = create_trip(client, alice, title="Other")
    foreign = create_location(client, alice, other["id"])
    response = client.post(
        "/api/transportation",
        json={"trip_id": trip["id"], "type": "bus", "from_location_id": foreign["id"]},
        headers=alice
    )
    assert response.status_code == 400


def test_changing_endpoint_recomputes_route(client, alice):
    trip = create_trip(client, alice)
    new_york = create_location(client, alice, trip["id"], latitude=NEW_YORK.latitude, longitude=NEW_YORK.longitude)
    los_angeles = create_location(client, alice, trip["id"],
                                  latitude=LOS_ANGELES.latitude, longitude=LOS_ANGELES.longitude)
    boston = create_location(client, alice, trip["id"], latitude=42.3601, longitude=-71.0589)

    leg = client.post(
        "/api/transportation",
        json={"trip_id": trip["id"], "type": "car",
              "from_location_id": new_york["id"], "to_location_id": los_angeles["id"]},
        headers=alice
    ).json()

    response = client.put(f"/api/transportation/{leg['id']}", json={"notes": "Road trip"}, headers=alice)
    assert response.json()["calculated_distance"] == pytest.approx(3935, abs=10)

    client.put(f"/api/transportation/{leg['id']}", json={"to_location_id": boston["id"]}, headers=alice)
    stored = client.get(f"/api/transportation/{leg['id']}", headers=alice).json()
    assert stored["calculated_distance"] == pytest.approx(306, abs=5)

    response = client.put(f"/api/transportation/{leg['id']}", json={"type": None}, headers=alice)
    assert response.status_code == 400


def test_transportation_ordered_by_departure(client, alice):
    trip = create_trip(client, alice)
    for departure, carrier in ((None, "Anytime"), ("2024-05-03T08:00:00", "Later"), ("2024-05-01T08:00:00", "First")):
        client.post(
            "/api/transportation",
            json={"trip_id": trip["id"], "type": "train", "carrier": carrier, "departure_time": departure},
            headers=alice
        )
    page = client.get(f"/api/transportation/trip/{trip['id']}", headers=alice).json()
    assert [leg["carrier"] for leg in page["items"]] == ["First", "Later", "Anytime"]
