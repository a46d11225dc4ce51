"""Record endpoint with a configured save token ("abc").

Invariants:
    - Wrong or missing x-admin-token → 401 and stored value unchanged
    - Matching x-admin-token → 200 and stored value changed
    - GET stays public
"""

import pytest


@pytest.fixture
def write_secret():
    return "abc"


async def _seed(client, text):
    res = await client.post(
        "/api/v1/query", json={"query": text}, headers={"x-admin-token": "abc"},
    )
    assert res.status_code == 200


async def test_wrong_token_is_401_and_value_unchanged(client):
    await _seed(client, "prior")

    res = await client.post(
        "/api/v1/query", json={"query": "x"}, headers={"x-admin-token": "wrong"},
    )
    assert res.status_code == 401
    assert res.json() == {"error": "Unauthorized"}

    res = await client.get("/api/v1/query")
    assert res.status_code == 200
    assert res.json() == {"query": "prior"}


async def test_missing_token_is_401_without_storage_access(client, fake_provider):
    res = await client.post("/api/v1/query", json={"query": "x"})
    assert res.status_code == 401
    assert fake_provider.calls == []


async def test_valid_token_alters_state(client):
    await _seed(client, "first")
    await _seed(client, "second")
    res = await client.get("/api/v1/query")
    assert res.json() == {"query": "second"}


async def test_get_needs_no_token(client):
    res = await client.get("/api/v1/query")
    assert res.status_code == 200
