"""
Shared fixtures: a throwaway SQLite database, an app client with stubbed
outbound HTTP, and logged-in users.
"""
import os
import tempfile

_workdir = tempfile.mkdtemp(prefix="tripjournal-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_workdir, 'test.db')}"
os.environ["UPLOAD_DIR"] = os.path.join(_workdir, "uploads")

import httpx
import pytest
from fastapi.testclient import TestClient

from tripjournal.api.dependencies import get_immich_transport, get_photo_storage, get_routing_service
from tripjournal.db.session import SessionLocal, drop_db, init_db
from tripjournal.main import app
from tripjournal.services.routing_service import RoutingService
from tripjournal.services.storage_service import PhotoStorage
from tripjournal.tests.helpers import signup_and_login


def unreachable(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("Connection refused", request=request)


@pytest.fixture(autouse=True)
def database():
    init_db()
    yield
    drop_db()


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def routing_service():
    """Routing service whose API is unreachable."""
    client = httpx.Client(transport=httpx.MockTransport(unreachable))
    yield RoutingService(client, api_key="test-key", api_url="https://routing.test")
    client.close()


@pytest.fixture
def immich_handler():
    """Replace `.handler` in a test to script Immich responses."""
    class Holder:
        handler = staticmethod(unreachable)
    return Holder


@pytest.fixture
def storage(tmp_path):
    return PhotoStorage(tmp_path / "uploads")


@pytest.fixture
def client(routing_service, storage, immich_handler):
    app.dependency_overrides[get_routing_service] = lambda: routing_service
    app.dependency_overrides[get_photo_storage] = lambda: storage
    app.dependency_overrides[get_immich_transport] = lambda: httpx.MockTransport(
        lambda request: immich_handler.handler(request)
    )
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def alice(client):
    return signup_and_login(client, "alice")


@pytest.fixture
def bob(client):
    return signup_and_login(client, "bob")


@pytest.fixture
def carol(client):
    return signup_and_login(client, "carol")
