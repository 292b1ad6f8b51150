"""Festival Routes — catalog reads and organizer creation.

Invariants:
    - GET never fails on a store outage: the catalog state carries the error
    - POST accepts multipart: a `draft` JSON part plus an `image` file part
    - POST responds with identity only; clients re-query the catalog afterwards
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError

from matsuri.api.dependencies import get_catalog_resolver, get_creation_orchestrator
from matsuri.core.festival_drafts import UploadAsset
from matsuri.schemas.festival import (
    CatalogResponse, FestivalCreatedResponse, FestivalDetailResponse,
    FestivalDraftIn, FestivalOut, RegionsResponse, SponsorOut,
)
from matsuri.services.catalog_resolver import CatalogResolver
from matsuri.services.creation_orchestrator import CreationOrchestrator

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/festivals", tags=["festivals"])


async def read_upload(upload: UploadFile | None) -> UploadAsset | None:
    """Read a multipart file part; an empty or missing part counts as absent."""
    if upload is None or not upload.filename:
        return None
    content = await upload.read()
    if not content:
        return None
    return UploadAsset(
        filename=upload.filename,
        content=content,
        content_type=upload.content_type,
    )


def _parse_draft(raw: str) -> FestivalDraftIn:
    try:
        return FestivalDraftIn.model_validate_json(raw)
    except PydanticValidationError as e:
        raise RequestValidationError([
            {**err, "loc": ("body", "draft", *err["loc"])}
            for err in e.errors(include_url=False, include_context=False)
        ])


@router.get("", response_model=CatalogResponse)
async def list_festivals(
    search: str | None = Query(None, max_length=200),
    region: str | None = Query(None, max_length=50),
    resolver: CatalogResolver = Depends(get_catalog_resolver),
):
    """Festival grid filtered by name substring and exact region, newest first."""
    result = await resolver.resolve(search=search, region=region)
    return CatalogResponse.from_result(result)


@router.get("/regions", response_model=RegionsResponse)
async def list_regions(resolver: CatalogResolver = Depends(get_catalog_resolver)):
    return RegionsResponse(regions=await resolver.list_regions())


@router.get("/{festival_id}", response_model=FestivalDetailResponse)
async def get_festival(
    festival_id: UUID,
    resolver: CatalogResolver = Depends(get_catalog_resolver),
):
    detail = await resolver.resolve_festival(festival_id)
    return FestivalDetailResponse(
        festival=FestivalOut.from_resolved(detail.festival, detail.tiers),
        sponsors=[SponsorOut.from_record(s) for s in detail.sponsors],
    )


@router.post(
    "", response_model=FestivalCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_festival(
    draft: str = Form(...),
    image: UploadFile | None = File(None),
    orchestrator: CreationOrchestrator = Depends(get_creation_orchestrator),
):
    """Create a festival with its tiers from an organizer submission."""
    body = _parse_draft(draft)
    created = await orchestrator.create(
        body.to_draft(), await read_upload(image), body.tier_drafts(),
    )
    return FestivalCreatedResponse(
        festival_id=created.festival_id,
        image_path=created.image_path,
        tier_count=created.tier_count,
    )
