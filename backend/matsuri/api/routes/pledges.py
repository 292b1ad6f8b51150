"""Pledge Routes — sponsor pledges against one tier of one festival.

Invariants:
    - The logo is uploaded before the sponsor row is written
    - The response tells the client when to re-fetch the festival detail
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from matsuri.api.dependencies import get_pledge_submitter
from matsuri.api.routes.festivals import read_upload
from matsuri.core.pledges import PledgeRequest
from matsuri.schemas.pledge import PledgeResponse
from matsuri.services.pledge_submitter import PledgeSubmitter

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/festivals", tags=["pledges"])


@router.post(
    "/{festival_id}/tiers/{tier_id}/pledges",
    response_model=PledgeResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_pledge(
    festival_id: UUID,
    tier_id: UUID,
    company_name: str = Form(""),
    email: str = Form(""),
    logo: UploadFile | None = File(None),
    submitter: PledgeSubmitter = Depends(get_pledge_submitter),
):
    receipt = await submitter.submit(PledgeRequest(
        festival_id=festival_id,
        tier_id=tier_id,
        company_name=company_name,
        email=email,
        logo=await read_upload(logo),
    ))
    return PledgeResponse(
        sponsor_id=receipt.sponsor_id,
        festival_id=receipt.festival_id,
        tier_id=receipt.tier_id,
        logo_url=receipt.logo_url,
        message=receipt.message,
        refetch_after_seconds=submitter.completion_delay,
    )
