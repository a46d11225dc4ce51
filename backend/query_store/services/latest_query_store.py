"""Latest Query Store — read and write the single "latest" record through a StorageProvider.

Invariants:
    - read() never fails for a missing record: it returns {"query": ""}
    - write() checks the admin token BEFORE any provider call; a rejected
      write leaves storage untouched
    - write() is find-then-branch: update the found record, else create it
    - updated_at is set from the injected clock on every write
    - No retries, no locking: concurrent writers race, last write wins

Design Decisions:
    - Secret and provider passed to the constructor, never read from env here
    - Clock injectable so tests can pin updated_at
"""

import logging
from datetime import datetime, timezone
from typing import Callable

from query_store.core.errors import AuthorizationError, ErrorContext
from query_store.core.record import (
    RECORD_NAME, build_record, check_write_token, query_of,
)
from query_store.core.repository_protocols import StorageProvider

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LatestQueryStore:
    """Get-or-create-or-update over the single named record."""

    def __init__(
        self,
        provider: StorageProvider,
        write_secret: str | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.provider = provider
        self.write_secret = write_secret or None
        self.clock = clock

    async def read(self) -> dict:
        stored = await self.provider.find_by_name(RECORD_NAME)
        logger.debug(
            "Latest query read",
            extra={
                "backend": self.provider.backend_name,
                "record_name": RECORD_NAME,
            },
        )
        return {"query": query_of(stored)}

    async def write(self, query_text: str, auth_token: str | None = None) -> dict:
        if not check_write_token(self.write_secret, auth_token):
            raise AuthorizationError(
                context=ErrorContext(
                    backend=self.provider.backend_name, operation="write",
                ),
            )
        existing = await self.provider.find_by_name(RECORD_NAME)
        record = build_record(query_text, self.clock())
        await self.provider.upsert(record, existing)
        return {"ok": True}
