"""Provider Factory — builds the configured StorageProvider for one request.

Invariants:
    - Backend chosen only by settings.storage_backend, never by probing libraries
    - Missing credentials raise ConfigurationError with a message naming them;
      nothing is contacted before the check passes
"""

import httpx

from query_store.config import Settings
from query_store.core.errors import ConfigurationError, ErrorContext
from query_store.core.repository_protocols import StorageProvider
from query_store.infrastructure.airtable_provider import AirtableProvider
from query_store.infrastructure.blobs_provider import NetlifyBlobsProvider
from query_store.infrastructure.database import DatabaseSessionManager
from query_store.infrastructure.sql_provider import SqlProvider


def build_provider(
    settings: Settings,
    http: httpx.AsyncClient,
    db: DatabaseSessionManager | None = None,
) -> StorageProvider:
    backend = settings.storage_backend
    context = ErrorContext(backend=backend, operation="configure")

    if backend == "airtable":
        if not settings.airtable_api_key or not settings.airtable_base_id:
            raise ConfigurationError(
                "Airtable credentials not set in environment variables", context,
            )
        return AirtableProvider(
            http,
            api_key=settings.airtable_api_key,
            base_id=settings.airtable_base_id,
            table_name=settings.airtable_table_name,
            updated_at_field=settings.airtable_updated_at_field.strip(),
        )

    if backend == "blobs":
        if not settings.netlify_site_id or not settings.netlify_blobs_token:
            raise ConfigurationError(
                "Netlify Blobs credentials not set in environment variables "
                "(NETLIFY_SITE_ID, NETLIFY_BLOBS_TOKEN)",
                context,
            )
        return NetlifyBlobsProvider(
            http,
            site_id=settings.netlify_site_id,
            token=settings.netlify_blobs_token,
            store_name=settings.blobs_store_name,
            api_url=settings.blobs_api_url,
        )

    if backend == "sql":
        if db is None:
            raise ConfigurationError("Database not initialized", context)
        return SqlProvider(db)

    raise ConfigurationError(f"Unknown storage backend: {backend!r}", context)
