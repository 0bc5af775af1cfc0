"""Route test fixtures — relay app over a stub upstream + httpx test client.

Invariants:
    - Every test gets a fresh StubUpstream (no state shared between tests)
    - Settings built explicitly: no .env file, no environment mutation
    - The stub is injected through create_app(upstream=...), the same seam
      production uses for the real client

Design Decisions:
    - ASGITransport does not run lifespan: the injected stub is used as-is
"""

import pytest
from httpx import ASGITransport, AsyncClient

from relay.main import create_app
from tests.services.factories import ADMIN_TOKEN, make_settings
from tests.services.stub_upstream import StubUpstream


@pytest.fixture
def stub():
    return StubUpstream()


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def relay_app(settings, stub):
    return create_app(settings, upstream=stub)


@pytest.fixture
async def client(relay_app):
    async with AsyncClient(
        transport=ASGITransport(app=relay_app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def admin_headers():
    return {"X-Admin-Token": ADMIN_TOKEN}
