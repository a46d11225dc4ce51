"""Request Dependencies — per-request wiring of Settings into services.

Invariants:
    - One httpx.AsyncClient per request, closed when the response is done
    - ConfigurationError raised here reaches the global handler as a 500
    - Tests replace get_settings / get_latest_query_store / get_sheet_forwarder
      via app.dependency_overrides
"""

from typing import AsyncGenerator

import httpx
from fastapi import Depends

import query_store.infrastructure.database as db_module
from query_store.config import Settings, get_settings
from query_store.infrastructure.provider_factory import build_provider
from query_store.infrastructure.sheet_client import SheetForwarder
from query_store.services.latest_query_store import LatestQueryStore


async def get_latest_query_store(
    settings: Settings = Depends(get_settings),
) -> AsyncGenerator[LatestQueryStore, None]:
    async with httpx.AsyncClient(timeout=settings.provider_timeout_seconds) as http:
        provider = build_provider(settings, http, db_module.db_manager)
        yield LatestQueryStore(provider, write_secret=settings.save_token)


def get_sheet_forwarder(
    settings: Settings = Depends(get_settings),
) -> SheetForwarder | None:
    """None when no sheet endpoint is configured."""
    if not settings.sheet_endpoint_url:
        return None
    return SheetForwarder(
        settings.sheet_endpoint_url,
        default_token=settings.sheet_token,
        timeout_seconds=settings.provider_timeout_seconds,
    )
