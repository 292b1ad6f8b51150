"""API test fixtures — FastAPI app over in-memory SQLite and fake storage.

Invariants:
    - get_store/get_storage overridden: no real database or storage server
    - Overrides cleared after every test
"""

import pytest
from httpx import ASGITransport, AsyncClient

from matsuri.api.dependencies import get_storage, get_store
from matsuri.main import app

from tests.services.fakes import FakeStorage


@pytest.fixture
def api_storage():
    return FakeStorage()


@pytest.fixture
async def client(sql_store, api_storage):
    app.dependency_overrides[get_store] = lambda: sql_store
    app.dependency_overrides[get_storage] = lambda: api_storage

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
