"""Liveness and readiness probes."""


async def test_liveness_always_healthy(api_client):
    res = await api_client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_fails_without_credentials(api_client):
    res = await api_client.get("/api/v1/health/ready")
    assert res.status_code == 503
    assert res.json()["status"] == "not_ready"
    assert "Airtable credentials" in res.json()["reason"]


async def test_readiness_passes_with_credentials(api_client, settings):
    settings.airtable_api_key = "key"
    settings.airtable_base_id = "app1"
    res = await api_client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json() == {"status": "ready", "backend": "airtable"}
