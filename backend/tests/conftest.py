"""Root conftest — shared test configuration and the in-memory store.

Invariants:
    - Tests never reach a real database or storage server
    - Every test gets a fresh in-memory SQLite database

Design Decisions:
    - StaticPool: one connection shared by every session, so the in-memory
      database survives across the store's independent sessions
"""

import os

import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("STORAGE_URL", "http://storage.test/storage/v1")
os.environ.setdefault("STORAGE_SERVICE_KEY", "test-service-key")

from matsuri.db.base import Base  # noqa: E402
import matsuri.models  # noqa: E402,F401
from matsuri.infrastructure.database import DatabaseSessionManager  # noqa: E402
from matsuri.infrastructure.festival_store import SqlFestivalStore  # noqa: E402


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def test_db_manager(test_engine):
    return DatabaseSessionManager.from_engine(test_engine)


@pytest.fixture
def sql_store(test_db_manager):
    return SqlFestivalStore(test_db_manager)
