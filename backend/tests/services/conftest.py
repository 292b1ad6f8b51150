"""Service test fixtures — in-memory fakes and pinned settings.

Invariants:
    - No service test touches SQLite, HTTP, or the clock beyond asyncio.sleep(0)
"""

import pytest

from matsuri.config import Settings

from tests.services.fakes import FakeStorage, FakeStore


@pytest.fixture
def settings():
    return Settings(
        festival_image_bucket="festival-images",
        festival_image_folder="festival-images",
        sponsor_logo_bucket="festival-logos",
        sponsor_logo_folder="logos",
        signed_url_ttl_seconds=3600,
        pledge_completion_delay_seconds=0,
    )


@pytest.fixture
def fake_store():
    return FakeStore()


@pytest.fixture
def fake_storage():
    return FakeStorage()
