"""build_provider — backend selection and credential checks."""

import httpx
import pytest

from query_store.config import Settings
from query_store.core.errors import ConfigurationError
from query_store.infrastructure.airtable_provider import AirtableProvider
from query_store.infrastructure.blobs_provider import NetlifyBlobsProvider
from query_store.infrastructure.database import DatabaseSessionManager
from query_store.infrastructure.provider_factory import build_provider
from query_store.infrastructure.sql_provider import SqlProvider


def _settings(**overrides) -> Settings:
    base = {
        "storage_backend": "airtable",
        "airtable_api_key": "",
        "airtable_base_id": "",
        "netlify_site_id": "",
        "netlify_blobs_token": "",
    }
    base.update(overrides)
    return Settings(_env_file=None, **base)


@pytest.fixture
async def http():
    async with httpx.AsyncClient() as client:
        yield client


async def test_airtable_selected_with_credentials(http):
    provider = build_provider(
        _settings(airtable_api_key="k", airtable_base_id="app1", airtable_table_name="T"),
        http,
    )
    assert isinstance(provider, AirtableProvider)
    assert provider.base_url == "https://api.airtable.com/v0/app1/T"


@pytest.mark.parametrize("overrides", [
    {},
    {"airtable_api_key": "k"},
    {"airtable_base_id": "app1"},
])
async def test_airtable_missing_credentials(http, overrides):
    with pytest.raises(ConfigurationError, match="Airtable credentials not set"):
        build_provider(_settings(**overrides), http)


async def test_blobs_selected_with_credentials(http):
    provider = build_provider(
        _settings(storage_backend="blobs", netlify_site_id="s", netlify_blobs_token="t"),
        http,
    )
    assert isinstance(provider, NetlifyBlobsProvider)
    assert provider.store_url == "https://api.netlify.com/api/v1/blobs/s/queries"


async def test_blobs_missing_credentials(http):
    with pytest.raises(ConfigurationError, match="Netlify Blobs credentials"):
        build_provider(_settings(storage_backend="blobs", netlify_site_id="s"), http)


async def test_sql_requires_initialized_database(http):
    with pytest.raises(ConfigurationError, match="Database not initialized"):
        build_provider(_settings(storage_backend="sql"), http, None)


async def test_sql_selected_with_database(http):
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    provider = build_provider(_settings(storage_backend="sql"), http, manager)
    assert isinstance(provider, SqlProvider)
    assert provider.db is manager


async def test_whitespace_credentials_count_as_missing(http):
    with pytest.raises(ConfigurationError):
        build_provider(_settings(airtable_api_key="  ", airtable_base_id=" "), http)


async def test_airtable_updated_at_field_passed_through(http):
    provider = build_provider(
        _settings(
            airtable_api_key="k", airtable_base_id="app1",
            airtable_updated_at_field=" ",
        ),
        http,
    )
    assert provider.updated_at_field == ""
