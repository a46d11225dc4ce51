"""API test fixtures — app client with Settings overridden per test.

Invariants:
    - `settings` fixture is the only Settings the app sees (no .env, no env leaks
      for the fields it sets)
    - No store override here: requests go through the real dependency wiring
"""

import pytest
from httpx import ASGITransport, AsyncClient

from query_store.config import Settings, get_settings
from query_store.main import app


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        storage_backend="airtable",
        airtable_api_key="",
        airtable_base_id="",
        save_token="",
        sheet_endpoint_url="",
    )


@pytest.fixture
async def api_client(settings):
    app.dependency_overrides[get_settings] = lambda: settings

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
