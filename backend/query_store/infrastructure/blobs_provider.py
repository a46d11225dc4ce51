"""Netlify Blobs Provider — stores the record as a JSON blob under one key.

Invariants:
    - Blob lives at {api_url}/api/v1/blobs/{site_id}/{store}/{name}
    - Blob body is JSON {"name", "query", "updatedAt"}
    - GET 404 means "no record" (None), any other non-2xx raises ProviderError
    - upsert is a single PUT: blob writes overwrite, so `existing` only
      supplies the key

Design Decisions:
    - Plain HTTP API through httpx instead of a JS-era client library: one
      pinned client, no module-shape detection
"""

import json
import logging
from urllib.parse import quote

import httpx

from query_store.core.errors import ErrorContext, ProviderError
from query_store.core.record import Record, StoredRecord, parse_timestamp

logger = logging.getLogger(__name__)


class NetlifyBlobsProvider:
    """StorageProvider backed by a Netlify Blobs store."""

    backend_name = "blobs"

    def __init__(
        self,
        http: httpx.AsyncClient,
        site_id: str,
        token: str,
        store_name: str = "queries",
        api_url: str = "https://api.netlify.com",
    ):
        self.http = http
        self.store_url = (
            f"{api_url.rstrip('/')}/api/v1/blobs/"
            f"{quote(site_id, safe='')}/{quote(store_name, safe='')}"
        )
        self._auth = {"Authorization": f"Bearer {token}"}

    def _blob_url(self, key: str) -> str:
        return f"{self.store_url}/{quote(key, safe='')}"

    async def find_by_name(self, name: str) -> StoredRecord | None:
        context = ErrorContext(backend=self.backend_name, operation="get")
        response = await self._send("GET", self._blob_url(name), context)
        if response.status_code == 404:
            return None
        if not response.is_success:
            raise ProviderError(
                f"Blobs get error: {response.status_code}",
                self.backend_name, context=context,
            )
        return _decode_blob(name, response.content)

    async def upsert(
        self, record: Record, existing: StoredRecord | None,
    ) -> StoredRecord:
        key = existing.record_id if existing is not None else record.name
        context = ErrorContext(backend=self.backend_name, operation="set")
        body = {
            "name": record.name,
            "query": record.query,
            "updatedAt": record.updated_at.isoformat(),
        }
        response = await self._send(
            "PUT", self._blob_url(key), context,
            content=json.dumps(body).encode("utf-8"),
        )
        if not response.is_success:
            raise ProviderError(
                f"Blobs set error: {response.status_code}",
                self.backend_name, context=context,
            )
        logger.info(
            "Blob record written",
            extra={"backend": self.backend_name, "record_name": record.name},
        )
        return StoredRecord(
            record_id=key, name=record.name,
            query=record.query, updated_at=record.updated_at,
        )

    async def _send(
        self, method: str, url: str, context: ErrorContext, **kwargs,
    ) -> httpx.Response:
        try:
            return await self.http.request(method, url, headers=self._auth, **kwargs)
        except httpx.HTTPError as e:
            raise ProviderError(str(e), self.backend_name, context=context) from e


def _decode_blob(key: str, content: bytes) -> StoredRecord:
    """Decode a stored blob; a bare-text blob is treated as the query itself."""
    try:
        data = json.loads(content)
    except ValueError:
        data = None
    if not isinstance(data, dict):
        return StoredRecord(
            record_id=key, name=key,
            query=content.decode("utf-8", errors="replace"),
        )
    return StoredRecord(
        record_id=key,
        name=data.get("name") or key,
        query=data.get("query") or "",
        updated_at=parse_timestamp(data.get("updatedAt")),
    )
