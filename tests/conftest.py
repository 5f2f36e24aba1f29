"""Root conftest - shared test configuration and store fixtures.

Invariants:
    - Every test gets its own in-memory fakeredis server (no shared keyspace)
    - The app under test is built by create_app() with the fake store injected

Design Decisions:
    - fakeredis over a live Valkey: same command semantics, no external process
    - server.connected = False simulates an unreachable store
"""

import os

import fakeredis
import pytest
from fakeredis.aioredis import FakeRedis
from httpx import ASGITransport, AsyncClient

# Ensure tests never pick up a real store
os.environ.setdefault("VALKEY_URL", "redis://localhost:6379/15")

from endpoint_registry.config import Settings  # noqa: E402
from endpoint_registry.infrastructure.endpoint_store import EndpointStore  # noqa: E402
from endpoint_registry.main import create_app  # noqa: E402
from endpoint_registry.schemas.endpoint import Endpoint  # noqa: E402


@pytest.fixture
def fake_server():
    return fakeredis.FakeServer()


@pytest.fixture
async def redis_client(fake_server):
    client = FakeRedis(server=fake_server, decode_responses=True)
    yield client
    await client.aclose()


@pytest.fixture
def store(redis_client):
    return EndpointStore(redis_client)


@pytest.fixture
def settings():
    return Settings(valkey_url="redis://localhost:6379/15", log_format="text")


@pytest.fixture
async def client(settings, store):
    """API test client with the fake store injected."""
    app = create_app(settings, store=store)
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def payload():
    return {
        "identifier": "my-service",
        "url": "https://example.com/health",
        "method": "GET",
        "status_online": 200,
        "frequency": "30s",
        "fail_after": 3,
    }


@pytest.fixture
def endpoint(payload):
    return Endpoint.model_validate(payload)
