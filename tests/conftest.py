"""Shared pytest fixtures: fake backend and fake gateway built on httpx.MockTransport."""

import os

import httpx
import pytest
import pytest_asyncio

from tests.factories import FakeServer, sample_page

os.environ.setdefault("BACKEND_URL", "http://backend.test/api")
os.environ.setdefault("PORTAL_GATEWAY_URL", "http://gateway.test")


@pytest.fixture
def backend():
    """Fake listings backend; answers 200 {} until a test sets `handler`."""
    return FakeServer(lambda request: httpx.Response(200, json={}))


@pytest.fixture
def client(backend):
    """TestClient for the gateway with the backend dependency pointed at the fake."""
    from fastapi.testclient import TestClient

    from gateway.deps import get_backend, make_backend_client
    from gateway.main import app

    async def fake_backend():
        http = make_backend_client("http://backend.test/api", transport=backend.transport())
        try:
            yield http
        finally:
            await http.aclose()

    app.dependency_overrides[get_backend] = fake_backend
    with TestClient(app) as tc:
        yield tc
    app.dependency_overrides.clear()


@pytest.fixture
def gateway():
    """Fake gateway the portal hooks talk to; answers with page 1 until a test sets `handler`."""

    def default(request: httpx.Request) -> httpx.Response:
        page = int(request.url.params.get("page", "1"))
        return httpx.Response(200, json=sample_page(page=page))

    return FakeServer(default)


@pytest_asyncio.fixture
async def portal_client(gateway):
    from portal.settings import make_client

    http = make_client("http://gateway.test", transport=gateway.transport())
    try:
        yield http
    finally:
        await http.aclose()
