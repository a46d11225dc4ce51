"""Record Domain Types — the single named value and pure helpers around it.

Invariants:
    - RECORD_NAME is the only name this service reads or writes
    - Record.updated_at is always timezone-aware UTC
    - check_write_token never short-circuits on the first differing byte
"""

import hmac
from dataclasses import dataclass
from datetime import datetime, timezone

RECORD_NAME = "latest"


@dataclass(frozen=True)
class Record:
    """A record as the service sees it, independent of backend."""
    name: str
    query: str
    updated_at: datetime


@dataclass(frozen=True)
class StoredRecord:
    """A record as returned by a provider, with the provider's own identifier."""
    record_id: str
    name: str
    query: str
    updated_at: datetime | None = None


def build_record(query_text: str, now: datetime) -> Record:
    """Build the record for a write at time `now`."""
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return Record(
        name=RECORD_NAME, query=query_text,
        updated_at=now.astimezone(timezone.utc),
    )


def query_of(stored: StoredRecord | None) -> str:
    """Query text to return on read; missing record or null query reads as ""."""
    if stored is None:
        return ""
    return stored.query or ""


def check_write_token(secret: str | None, presented: str | None) -> bool:
    """True when writes are unprotected, or the presented token matches."""
    if not secret:
        return True
    if presented is None:
        return False
    return hmac.compare_digest(secret.encode("utf-8"), presented.encode("utf-8"))


def parse_timestamp(value: object) -> datetime | None:
    """Parse an ISO-8601 timestamp from a backend payload; tolerate junk."""
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value:
        return None
    try:
        # Airtable and JS toISOString() emit a trailing "Z"
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
