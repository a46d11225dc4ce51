"""QueryRecord ORM — the SQL backend's row for a named record.

Invariants:
    - name is unique: the database refuses a second "latest" row even though
      the service itself does find-then-write
    - updated_at is timezone-aware
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from query_store.db.base import Base


class QueryRecord(Base):
    """One named text value."""
    __tablename__ = "query_records"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    query: Mapped[str] = mapped_column(Text, nullable=False, default="")
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
