"""Latest Query — GET/POST over the single stored record.

Invariants:
    - GET → {"query": str}, "" when nothing was stored yet
    - POST → {"ok": true}; x-admin-token checked when a save token is configured
    - Any other method → 405 before the store dependency is resolved
      (no provider built, no storage access)

Design Decisions:
    - Router has no prefix: main.py mounts it under /api/v1/query and the
      legacy /.netlify/functions/query path
"""

import logging

from fastapi import APIRouter, Depends, Header, Request

from query_store.api.dependencies import get_latest_query_store
from query_store.core.errors import MethodNotSupportedError
from query_store.schemas.query import QueryRead, QueryWrite, WriteAck
from query_store.services.latest_query_store import LatestQueryStore

logger = logging.getLogger(__name__)
router = APIRouter(tags=["query"])

UNSUPPORTED_METHODS = ["HEAD", "PUT", "PATCH", "DELETE", "OPTIONS"]


@router.get("", response_model=QueryRead)
async def read_latest_query(
    store: LatestQueryStore = Depends(get_latest_query_store),
):
    """Return the stored query, or "" if none was ever written."""
    return await store.read()


@router.post("", response_model=WriteAck)
async def write_latest_query(
    body: QueryWrite | None = None,
    x_admin_token: str | None = Header(None),
    store: LatestQueryStore = Depends(get_latest_query_store),
):
    """Create or overwrite the stored query."""
    query_text = (body.query if body else None) or ""
    return await store.write(query_text, auth_token=x_admin_token)


@router.api_route("", methods=UNSUPPORTED_METHODS, include_in_schema=False)
async def unsupported_method(request: Request):
    raise MethodNotSupportedError(request.method)
