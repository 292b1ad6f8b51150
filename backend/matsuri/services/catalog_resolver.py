"""Catalog Resolver — festival queries with per-record image signing fan-out.

Invariants:
    - Festivals are returned newest first (store orders by created_at DESC)
    - Every returned display URL is a well-formed http(s) URL or "" — signing
      failures never escape, never cancel sibling signings
    - A store failure yields STORE_ERROR with an empty list and one retryable
      message; a zero-row query yields EMPTY with no error
    - Each record's raw image reference is normalized before signing, whatever
      historical encoding it was stored in

Design Decisions:
    - asyncio.gather over wrappers that absorb their own failures: all-settled
      join without return_exceptions bookkeeping
    - Detail reads fetch tiers, sponsors, and the signed image concurrently;
      there a store failure propagates (the detail page has no empty state)
"""

import asyncio
import logging
from dataclasses import dataclass, field
from urllib.parse import urlsplit

from matsuri.config import Settings
from matsuri.core.domain_types import CatalogState, FestivalId
from matsuri.core.errors import ResourceNotFoundError, StoreUnavailableError
from matsuri.core.funding import (
    FundingSummary, MinimumAmount, funding_summary, minimum_monetary_tier,
)
from matsuri.core.image_reference import normalize_image_reference
from matsuri.core.records import FestivalRecord, SponsorRecord, TierRecord
from matsuri.core.repository_protocols import FestivalStore, ObjectStorage

logger = logging.getLogger(__name__)

STORE_UNAVAILABLE_MESSAGE = (
    "Festival listings are temporarily unavailable. Please try again shortly."
)


@dataclass(frozen=True)
class ResolvedFestival:
    """A festival ready for display: signed image plus funding figures."""
    festival: FestivalRecord
    display_image_url: str
    funding: FundingSummary
    minimum_sponsorship: MinimumAmount


@dataclass(frozen=True)
class CatalogResult:
    festivals: list[ResolvedFestival] = field(default_factory=list)
    error: str | None = None

    @property
    def state(self) -> CatalogState:
        if self.error is not None:
            return CatalogState.STORE_ERROR
        if not self.festivals:
            return CatalogState.EMPTY
        return CatalogState.POPULATED


@dataclass(frozen=True)
class FestivalDetail:
    festival: ResolvedFestival
    tiers: list[TierRecord]
    sponsors: list[SponsorRecord]


def _is_well_formed(url: str) -> bool:
    parts = urlsplit(url)
    return parts.scheme in ("http", "https") and bool(parts.netloc)


class CatalogResolver:
    """Read side: grid query, region list, festival detail."""

    def __init__(
        self, store: FestivalStore, storage: ObjectStorage, settings: Settings,
    ):
        self.store = store
        self.storage = storage
        self.bucket = settings.festival_image_bucket
        self.folder = settings.festival_image_folder
        self.ttl_seconds = settings.signed_url_ttl_seconds

    async def resolve(
        self, search: str | None = None, region: str | None = None,
    ) -> CatalogResult:
        """Query festivals and sign every image concurrently."""
        try:
            records = await self.store.query_festivals(search=search, region=region)
        except StoreUnavailableError as e:
            logger.error(f"Catalog query failed: {e.message}", extra={"error_code": e.code})
            return CatalogResult(festivals=[], error=STORE_UNAVAILABLE_MESSAGE)

        urls = await asyncio.gather(
            *(self.display_url(r.image_url, r.id) for r in records),
        )
        return CatalogResult(
            festivals=[self._resolved(r, url) for r, url in zip(records, urls)],
        )

    async def list_regions(self) -> list[str]:
        """Distinct regions present in the store; [] when the store is down."""
        try:
            return await self.store.list_regions()
        except StoreUnavailableError as e:
            logger.warning(f"Region list unavailable: {e.message}")
            return []

    async def resolve_festival(self, festival_id: FestivalId) -> FestivalDetail:
        record = await self.store.get_festival(festival_id)
        if record is None:
            raise ResourceNotFoundError("Festival", str(festival_id))
        tiers, sponsors, url = await asyncio.gather(
            self.store.list_tiers(festival_id),
            self.store.list_sponsors(festival_id),
            self.display_url(record.image_url, record.id),
        )
        resolved = self._resolved(record, url, tiers)
        return FestivalDetail(festival=resolved, tiers=tiers, sponsors=sponsors)

    async def display_url(
        self, raw_reference: str | None, festival_id: FestivalId | None = None,
    ) -> str:
        """Signed URL for a stored reference, or "" when absent or unsignable."""
        path = normalize_image_reference(raw_reference, self.folder)
        if path is None:
            return ""
        try:
            url = await self.storage.sign(self.bucket, path, self.ttl_seconds)
        except Exception as e:  # one record must never fail the batch
            logger.warning(
                f"Could not sign image ({type(e).__name__}): {e}",
                extra={
                    "festival_id": str(festival_id) if festival_id else None,
                    "path": path,
                },
            )
            return ""
        if not isinstance(url, str) or not _is_well_formed(url):
            logger.warning(
                "Storage returned a malformed signed URL", extra={"path": path},
            )
            return ""
        return url

    def _resolved(
        self,
        record: FestivalRecord,
        url: str,
        tiers: list[TierRecord] | None = None,
    ) -> ResolvedFestival:
        return ResolvedFestival(
            festival=record,
            display_image_url=url,
            funding=funding_summary(record),
            minimum_sponsorship=minimum_monetary_tier(
                record.tiers if tiers is None else tiers,
            ),
        )
