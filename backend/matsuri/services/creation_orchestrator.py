"""Creation Orchestrator — upload image → insert festival → insert tiers.

Invariants:
    - Validation (image present, ≥ 1 tier, field rules) runs before any network call
    - Steps run strictly in sequence; each consumes the previous step's output
    - The stored image reference is the folder-relative upload path, never a URL
    - Open festivals persist funding_goal = 0 and current_funding = 0
    - No rollback: a failed tier batch leaves the festival with zero tiers,
      a failed festival insert leaves the uploaded image orphaned
    - Not idempotent: resubmitting creates a second festival and a second upload

Design Decisions:
    - Steps declared as a Saga with their unexecuted compensations spelled out
    - The unique token generator is injectable so tests can pin upload paths
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Callable

from matsuri.config import Settings
from matsuri.core.asset_names import unique_asset_path
from matsuri.core.domain_types import FestivalId
from matsuri.core.festival_drafts import (
    FestivalDraft, UploadAsset, festival_row, validate_submission,
)
from matsuri.core.repository_protocols import FestivalStore, ObjectStorage
from matsuri.core.tiers import TierDraft, tier_row
from matsuri.services.saga import Saga, SagaStep

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreatedFestival:
    """Identity of a newly created festival. Re-query the catalog for the rest."""
    festival_id: FestivalId
    image_path: str
    tier_count: int


def _uuid_token() -> str:
    return uuid.uuid4().hex


class CreationOrchestrator:
    """Write side for organizers: one festival with its tiers."""

    def __init__(
        self,
        store: FestivalStore,
        storage: ObjectStorage,
        settings: Settings,
        token_factory: Callable[[], str] = _uuid_token,
    ):
        self.store = store
        self.storage = storage
        self.bucket = settings.festival_image_bucket
        self.folder = settings.festival_image_folder
        self.token_factory = token_factory

    async def create(
        self,
        draft: FestivalDraft,
        image: UploadAsset | None,
        tiers: list[TierDraft],
    ) -> CreatedFestival:
        validate_submission(draft, image, tiers)
        image_path = unique_asset_path(
            self.folder, image.filename, self.token_factory(), prefix="festival_",
        )

        async def upload_image(ctx: dict[str, Any]) -> str:
            return await self.storage.upload(
                self.bucket, image_path, image.content, image.content_type,
            )

        async def insert_festival(ctx: dict[str, Any]) -> FestivalId:
            record = await self.store.insert_festival(
                festival_row(draft, ctx["upload_image"]),
            )
            ctx["festival_id"] = record.id
            return record.id

        async def insert_tiers(ctx: dict[str, Any]) -> int:
            rows = [tier_row(t, ctx["insert_festival"]) for t in tiers]
            inserted = await self.store.insert_tiers(rows)
            return len(inserted)

        saga = Saga("create_festival", [
            SagaStep(
                "upload_image", upload_image,
                compensation="delete stored image {result} (not performed)",
            ),
            SagaStep(
                "insert_festival", insert_festival,
                compensation="delete festival row {result} (not performed)",
            ),
            SagaStep("insert_tiers", insert_tiers),
        ])
        ctx = await saga.run()

        created = CreatedFestival(
            festival_id=ctx["insert_festival"],
            image_path=ctx["upload_image"],
            tier_count=ctx["insert_tiers"],
        )
        logger.info(
            f"Festival '{draft.name}' created with {created.tier_count} tier(s)",
            extra={"festival_id": str(created.festival_id)},
        )
        return created
