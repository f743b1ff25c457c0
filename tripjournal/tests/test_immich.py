"""
Tests for the Immich proxy endpoints with a scripted upstream.
"""
import time

import anyio
import httpx
import pytest

from tripjournal.main import app
from tripjournal.tests.helpers import configure_immich


def test_connection_test(client, alice, immich_handler):
    immich_handler.handler = lambda request: httpx.Response(200, json={"res": "pong"})
    response = client.post(
        "/api/immich/test",
        json={"api_url": "https://immich.test", "api_key": "k"},
        headers=alice
    )
    assert response.json() == {"connected": True}

    immich_handler.handler = lambda request: httpx.Response(401, json={"message": "Invalid API key"})
    response = client.post(
        "/api/immich/test",
        json={"api_url": "https://immich.test", "api_key": "bad"},
        headers=alice
    )
    assert response.status_code == 200
    assert response.json() == {"connected": False}


def test_connection_test_unreachable(client, alice):
    response = client.post(
        "/api/immich/test",
        json={"api_url": "https://immich.test", "api_key": "k"},
        headers=alice
    )
    assert response.json() == {"connected": False}


def test_requires_configuration(client, alice):
    assert client.get("/api/immich/assets/abc", headers=alice).status_code == 400
    assert client.post("/api/immich/search", json={}, headers=alice).status_code == 400


def test_search_assets(client, alice, immich_handler):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = request.read()
        return httpx.Response(200, json={
            "assets": {"items": [{"id": "a1"}, {"id": "a2"}], "total": 2, "nextPage": None}
        })

    immich_handler.handler = handler
    configure_immich(client, alice)
    response = client.post(
        "/api/immich/search",
        json={"taken_after": "2024-05-01T00:00:00", "size": 50},
        headers=alice
    )
    assert response.status_code == 200
    assert response.json() == {"assets": [{"id": "a1"}, {"id": "a2"}], "total": 2, "next_page": None}
    assert seen["path"] == "/api/search/metadata"
    assert b'"takenAfter"' in seen["body"]
    assert b'"takenBefore"' not in seen["body"]


def test_thumbnail_proxy(client, alice, immich_handler):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/assets/a1/thumbnail"
        assert request.url.params["size"] == "preview"
        return httpx.Response(200, content=b"\xff\xd8jpeg", headers={"content-type": "image/jpeg"})

    immich_handler.handler = handler
    configure_immich(client, alice)
    response = client.get("/api/immich/assets/a1/thumbnail", headers=alice)
    assert response.status_code == 200
    assert response.content == b"\xff\xd8jpeg"
    assert response.headers["content-type"] == "image/jpeg"
    assert "max-age" in response.headers["cache-control"]


def test_upstream_errors(client, alice, immich_handler):
    configure_immich(client, alice)
    # Default handler refuses connections
    assert client.get("/api/immich/assets/a1", headers=alice).status_code == 502

    immich_handler.handler = lambda request: httpx.Response(404, json={"message": "Not found"})
    assert client.get("/api/immich/assets/a1", headers=alice).status_code == 404

    immich_handler.handler = lambda request: httpx.Response(500, text="boom")
    assert client.get("/api/immich/assets/a1", headers=alice).status_code == 502


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.mark.anyio
async def test_slow_immich_does_not_stall_other_requests(client, alice, immich_handler):
    def slow(request: httpx.Request) -> httpx.Response:
        time.sleep(1.5)
        return httpx.Response(200, json={"res": "pong"})

    immich_handler.handler = slow
    results = {}

    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as api:
        async def ping_immich():
            response = await api.post(
                "/api/immich/test",
                json={"api_url": "https://immich.test", "api_key": "k"},
                headers=alice
            )
            results["immich"] = response.json()

        async def check_health():
            await anyio.sleep(0.3)
            started = time.monotonic()
            response = await api.get("/health")
            results["health_seconds"] = time.monotonic() - started
            assert response.status_code == 200

        async with anyio.create_task_group() as tasks:
            tasks.start_soon(ping_immich)
            tasks.start_soon(check_health)

    assert results["immich"] == {"connected": True}
    assert results["health_seconds"] < 0.5
