"""SqlProvider — find/create/update against in-memory SQLite.

Design Decisions:
    - StaticPool: every session shares the one in-memory database
    - Manager built with __new__ so the test engine is used as-is
"""

from datetime import datetime, timezone

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from query_store.core.errors import ProviderError
from query_store.core.record import Record, StoredRecord
from query_store.db.base import Base
from query_store.infrastructure.database import DatabaseSessionManager
from query_store.infrastructure.sql_provider import SqlProvider
from query_store.models.query_record import QueryRecord

NOW = datetime(2026, 4, 5, 6, 7, 8, tzinfo=timezone.utc)


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def db_manager(test_engine):
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )
    return manager


@pytest.fixture
def provider(db_manager):
    return SqlProvider(db_manager)


async def _row_count(db_manager) -> int:
    async with db_manager.session() as session:
        return await session.scalar(select(func.count()).select_from(QueryRecord))


async def test_find_on_empty_table_is_none(provider):
    assert await provider.find_by_name("latest") is None


async def test_create_then_find(provider):
    created = await provider.upsert(Record("latest", "hello", NOW), None)
    found = await provider.find_by_name("latest")

    assert found.record_id == created.record_id
    assert found.query == "hello"
    assert found.name == "latest"


async def test_update_keeps_single_row(provider, db_manager):
    created = await provider.upsert(Record("latest", "one", NOW), None)
    existing = await provider.find_by_name("latest")
    updated = await provider.upsert(Record("latest", "two", NOW), existing)

    assert updated.record_id == created.record_id
    assert (await provider.find_by_name("latest")).query == "two"
    assert await _row_count(db_manager) == 1


async def test_update_of_vanished_row_recreates_it(provider, db_manager):
    ghost = StoredRecord(
        record_id="00000000-0000-0000-0000-000000000001", name="latest", query="",
    )
    await provider.upsert(Record("latest", "back", NOW), ghost)
    assert (await provider.find_by_name("latest")).query == "back"
    assert await _row_count(db_manager) == 1


async def test_second_create_violates_unique_name(provider):
    await provider.upsert(Record("latest", "one", NOW), None)
    with pytest.raises(ProviderError, match="Integrity constraint violated") as exc_info:
        await provider.upsert(Record("latest", "two", NOW), None)
    assert exc_info.value.backend == "sql"


async def test_health_check_passes_on_live_engine(db_manager):
    assert await db_manager.health_check() is True
