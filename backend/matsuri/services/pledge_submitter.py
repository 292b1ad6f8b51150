"""Pledge Submitter — upload sponsor logo → insert sponsor row.

Invariants:
    - Validation (logo present, company name, email) runs before any network call
    - Logos get a permanent public URL, unlike festival images
    - No rollback: a failed insert after a successful upload orphans the logo
    - current_funding is never touched, even for monetary tiers (open question)
    - Completion is signalled only after the configured display delay

Design Decisions:
    - The tier is looked up before the saga: pledging to a tier that does not
      belong to the festival is a 404, not an orphaned upload
    - schedule_completion returns the asyncio.Task so callers can await or drop it
"""

import asyncio
import logging
import uuid
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from matsuri.config import Settings
from matsuri.core.asset_names import unique_asset_path
from matsuri.core.domain_types import FestivalId, SponsorId, TierId
from matsuri.core.errors import ResourceNotFoundError
from matsuri.core.pledges import (
    PledgeRequest, confirmation_message, sponsor_row, validate_pledge,
)
from matsuri.core.repository_protocols import FestivalStore, ObjectStorage
from matsuri.core.records import TierRecord
from matsuri.services.saga import Saga, SagaStep

logger = logging.getLogger(__name__)


CompletionCallback = Callable[["PledgeReceipt"], Awaitable[None] | None]


@dataclass(frozen=True)
class PledgeReceipt:
    sponsor_id: SponsorId
    festival_id: FestivalId
    tier_id: TierId
    logo_url: str
    message: str


def _uuid_token() -> str:
    return uuid.uuid4().hex


class PledgeSubmitter:
    """Write side for sponsors: one pledge to one tier."""

    def __init__(
        self,
        store: FestivalStore,
        storage: ObjectStorage,
        settings: Settings,
        token_factory: Callable[[], str] = _uuid_token,
    ):
        self.store = store
        self.storage = storage
        self.bucket = settings.sponsor_logo_bucket
        self.folder = settings.sponsor_logo_folder
        self.completion_delay = settings.pledge_completion_delay_seconds
        self.token_factory = token_factory

    async def submit(self, request: PledgeRequest) -> PledgeReceipt:
        validate_pledge(request)
        tier = await self._find_tier(request.festival_id, request.tier_id)
        logo = request.logo
        logo_path = unique_asset_path(self.folder, logo.filename, self.token_factory())

        async def upload_logo(ctx: dict[str, Any]) -> str:
            stored = await self.storage.upload(
                self.bucket, logo_path, logo.content, logo.content_type,
            )
            return self.storage.get_public_url(self.bucket, stored)

        async def insert_sponsor(ctx: dict[str, Any]) -> SponsorId:
            record = await self.store.insert_sponsor(
                sponsor_row(request, ctx["upload_logo"]),
            )
            return record.id

        saga = Saga("submit_pledge", [
            SagaStep(
                "upload_logo", upload_logo,
                compensation="delete stored logo {result} (not performed)",
            ),
            SagaStep("insert_sponsor", insert_sponsor),
        ])
        ctx = await saga.run({"festival_id": request.festival_id})

        receipt = PledgeReceipt(
            sponsor_id=ctx["insert_sponsor"],
            festival_id=request.festival_id,
            tier_id=request.tier_id,
            logo_url=ctx["upload_logo"],
            message=confirmation_message(request.company_name, tier.name, request.email),
        )
        logger.info(
            f"Pledge recorded for tier '{tier.name}'",
            extra={"festival_id": str(request.festival_id)},
        )
        return receipt

    def schedule_completion(
        self, receipt: PledgeReceipt, callback: CompletionCallback,
    ) -> asyncio.Task:
        """Invoke callback after the display delay; the caller then re-fetches.

        For in-process callers only. The HTTP shell cannot push to the client,
        so it returns the same delay as `refetch_after_seconds` instead.
        """

        async def _signal() -> None:
            await asyncio.sleep(self.completion_delay)
            result = callback(receipt)
            if asyncio.iscoroutine(result):
                await result

        return asyncio.create_task(_signal())

    async def _find_tier(self, festival_id: FestivalId, tier_id: TierId) -> TierRecord:
        tiers = await self.store.list_tiers(festival_id)
        for tier in tiers:
            if tier.id == tier_id:
                return tier
        raise ResourceNotFoundError("SponsorshipTier", str(tier_id))
