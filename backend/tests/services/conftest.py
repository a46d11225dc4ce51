"""Service test fixtures — in-memory provider + FastAPI test client.

Invariants:
    - Every test gets a fresh InMemoryProvider
    - get_latest_query_store overridden to wrap that provider; the write
      secret comes from the `write_secret` fixture (override per module)
"""

import pytest
from httpx import ASGITransport, AsyncClient

from query_store.api.dependencies import get_latest_query_store
from query_store.main import app
from query_store.services.latest_query_store import LatestQueryStore

from tests.services.fake_provider import InMemoryProvider


@pytest.fixture
def fake_provider():
    return InMemoryProvider()


@pytest.fixture
def write_secret():
    return None


@pytest.fixture
async def client(fake_provider, write_secret):
    """FastAPI test client with the record store dependency overridden."""
    async def override_store():
        yield LatestQueryStore(fake_provider, write_secret=write_secret)

    app.dependency_overrides[get_latest_query_store] = override_store

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
