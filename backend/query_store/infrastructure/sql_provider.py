"""SQL Provider — stores the record as a row of query_records through SQLAlchemy async.

Invariants:
    - One session per provider call, committed before returning
    - upsert with `existing` updates that row by primary key; a row that
      vanished in between is recreated
    - SQLAlchemy failures reach the caller as ProviderError (via DatabaseSessionManager)
"""

import logging
import uuid

from sqlalchemy import select

from query_store.core.record import Record, StoredRecord
from query_store.infrastructure.database import DatabaseSessionManager
from query_store.models.query_record import QueryRecord

logger = logging.getLogger(__name__)


class SqlProvider:
    """StorageProvider backed by a relational table."""

    backend_name = "sql"

    def __init__(self, db: DatabaseSessionManager):
        self.db = db

    async def find_by_name(self, name: str) -> StoredRecord | None:
        async with self.db.session() as session:
            result = await session.execute(
                select(QueryRecord).where(QueryRecord.name == name).limit(1),
            )
            row = result.scalar_one_or_none()
            return _to_stored(row) if row else None

    async def upsert(
        self, record: Record, existing: StoredRecord | None,
    ) -> StoredRecord:
        async with self.db.session() as session:
            row = None
            if existing is not None:
                row = await session.get(QueryRecord, uuid.UUID(existing.record_id))
            if row is None:
                row = QueryRecord(name=record.name)
                session.add(row)
            row.query = record.query
            row.updated_at = record.updated_at
            await session.commit()
            logger.info(
                f"SQL record {'updated' if existing else 'created'}",
                extra={"backend": self.backend_name, "record_name": record.name},
            )
            return _to_stored(row)


def _to_stored(row: QueryRecord) -> StoredRecord:
    return StoredRecord(
        record_id=str(row.id), name=row.name,
        query=row.query or "", updated_at=row.updated_at,
    )
