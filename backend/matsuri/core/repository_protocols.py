"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - Every insert commits on its own; no method spans more than one write

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - ObjectStorage.get_public_url is sync: it is URL construction, not IO
"""

from typing import Protocol

from matsuri.core.domain_types import FestivalId
from matsuri.core.records import FestivalRecord, SponsorRecord, TierRecord


class FestivalStore(Protocol):
    """Row query/insert contract — implemented by infrastructure."""
    async def query_festivals(
        self, search: str | None = None, region: str | None = None,
    ) -> list[FestivalRecord]: ...
    async def get_festival(self, festival_id: FestivalId) -> FestivalRecord | None: ...
    async def list_regions(self) -> list[str]: ...
    async def list_tiers(self, festival_id: FestivalId) -> list[TierRecord]: ...
    async def list_sponsors(self, festival_id: FestivalId) -> list[SponsorRecord]: ...
    async def insert_festival(self, row: dict) -> FestivalRecord: ...
    async def insert_tiers(self, rows: list[dict]) -> list[TierRecord]: ...
    async def insert_sponsor(self, row: dict) -> SponsorRecord: ...


class ObjectStorage(Protocol):
    """Object storage contract — implemented by infrastructure."""
    async def upload(
        self, bucket: str, path: str, data: bytes, content_type: str | None = None,
    ) -> str: ...
    async def sign(self, bucket: str, path: str, ttl_seconds: int) -> str: ...
    def get_public_url(self, bucket: str, path: str) -> str: ...
