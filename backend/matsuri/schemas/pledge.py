"""Pledge Schemas — response returned after a sponsor pledge is recorded."""

from uuid import UUID

from pydantic import BaseModel


class PledgeResponse(BaseModel):
    sponsor_id: UUID
    festival_id: UUID
    tier_id: UUID
    logo_url: str
    message: str
    refetch_after_seconds: float
