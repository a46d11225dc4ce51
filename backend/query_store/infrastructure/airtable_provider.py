"""Airtable Provider — stores the record as one row of an Airtable table over its REST API.

Invariants:
    - Rows are matched on the `Name` field; payload lives in `query`
    - Write timestamp goes to `updated_at_field` ("updatedAt"), or nowhere when it is ""
    - A 2xx reply that is not a JSON object raises ProviderError; non-object
      entries in `records` are skipped
    - find uses filterByFormula + pageSize=1: only the first match is ever seen
    - Non-2xx responses raise ProviderError("Airtable <op> error: <status>")
    - Transport failures (httpx.HTTPError) raise ProviderError(str(exc))
    - No retries: a failure ends the request

Design Decisions:
    - httpx.AsyncClient injected by the caller: one client per request, and
      tests swap in httpx.MockTransport without patching
"""

import logging
from urllib.parse import quote

import httpx

from query_store.core.errors import ErrorContext, ProviderError
from query_store.core.record import Record, StoredRecord, parse_timestamp

logger = logging.getLogger(__name__)

AIRTABLE_API_URL = "https://api.airtable.com/v0"


class AirtableProvider:
    """StorageProvider backed by an Airtable table."""

    backend_name = "airtable"

    def __init__(
        self,
        http: httpx.AsyncClient,
        api_key: str,
        base_id: str,
        table_name: str = "Queries",
        api_url: str = AIRTABLE_API_URL,
        updated_at_field: str = "updatedAt",
    ):
        self.http = http
        self.updated_at_field = updated_at_field
        self.base_url = f"{api_url}/{base_id}/{quote(table_name, safe='')}"
        self._auth = {"Authorization": f"Bearer {api_key}"}

    async def find_by_name(self, name: str) -> StoredRecord | None:
        params = {
            "filterByFormula": f'{{Name}} = "{_escape_formula(name)}"',
            "pageSize": "1",
        }
        data = await self._request("find", "GET", self.base_url, params=params)
        records = data.get("records")
        if not isinstance(records, list):
            records = []
        records = [r for r in records if isinstance(r, dict)]
        if not records:
            logger.debug(f"Airtable has no record named {name!r}")
            return None
        return _to_stored(records[0], self.updated_at_field)

    async def upsert(
        self, record: Record, existing: StoredRecord | None,
    ) -> StoredRecord:
        fields = {"query": record.query}
        if self.updated_at_field:
            fields[self.updated_at_field] = record.updated_at.isoformat()
        if existing is not None:
            data = await self._request(
                "patch", "PATCH", f"{self.base_url}/{existing.record_id}",
                json={"fields": fields},
            )
        else:
            data = await self._request(
                "create", "POST", self.base_url,
                json={"fields": {"Name": record.name, **fields}},
            )
        logger.info(
            f"Airtable record {'updated' if existing else 'created'}",
            extra={"backend": self.backend_name, "record_name": record.name},
        )
        return _to_stored(data, self.updated_at_field)

    async def _request(self, operation: str, method: str, url: str, **kwargs) -> dict:
        context = ErrorContext(backend=self.backend_name, operation=operation)
        try:
            response = await self.http.request(method, url, headers=self._auth, **kwargs)
        except httpx.HTTPError as e:
            raise ProviderError(str(e), self.backend_name, context=context) from e
        if not response.is_success:
            raise ProviderError(
                f"Airtable {operation} error: {response.status_code}",
                self.backend_name, context=context,
            )
        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(
                f"Airtable {operation} returned invalid JSON",
                self.backend_name, context=context,
            ) from e
        if not isinstance(data, dict):
            raise ProviderError(
                f"Airtable {operation} returned invalid JSON",
                self.backend_name, context=context,
            )
        return data


def _escape_formula(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def _to_stored(raw: dict, updated_at_field: str) -> StoredRecord:
    fields = raw.get("fields")
    if not isinstance(fields, dict):
        fields = {}
    return StoredRecord(
        record_id=raw.get("id", ""),
        name=fields.get("Name", ""),
        query=fields.get("query") or "",
        updated_at=(
            parse_timestamp(fields.get(updated_at_field)) if updated_at_field else None
        ),
    )
