"""Boundary Protocols — the contract between the record service and its storage backends.

Invariants:
    - The service never imports a concrete provider; it receives one
    - find_by_name returns None for an absent record, never raises for it
    - upsert updates `existing` when given, creates a new record otherwise
    - Every provider failure surfaces as ProviderError (core/errors.py)

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - upsert receives the result of the preceding find: the find-then-branch
      is visible in the service, not hidden inside each adapter
"""

from typing import Protocol

from query_store.core.record import Record, StoredRecord


class StorageProvider(Protocol):
    """Contract for singleton-record persistence, implemented by infrastructure/."""

    backend_name: str

    async def find_by_name(self, name: str) -> StoredRecord | None: ...

    async def upsert(
        self, record: Record, existing: StoredRecord | None,
    ) -> StoredRecord: ...
