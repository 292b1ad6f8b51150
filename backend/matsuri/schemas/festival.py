"""Festival Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - Tier input is a discriminated union on `type` (monetary | in-kind | service)
    - FestivalDraftIn.tiers has at least one entry
    - Responses expose the signed display URL, never the raw stored reference

Design Decisions:
    - Schemas convert into core drafts (to_draft): core rules still run in the
      orchestrator, so non-HTTP callers get the same validation
    - minimum_sponsorship is None plus an "inquire" label when no monetary tier exists
"""

from datetime import datetime
from typing import Annotated, Literal, Union
from uuid import UUID

from pydantic import BaseModel, Field

from matsuri.core.domain_types import CatalogState, FundingType, Region, TierType
from matsuri.core.festival_drafts import FestivalDraft
from matsuri.core.funding import NO_MINIMUM, format_minimum
from matsuri.core.records import SponsorRecord, TierRecord
from matsuri.core.tiers import (
    InKindTierDraft, MonetaryTierDraft, ServiceTierDraft, TierDraft, tier_headline,
)
from matsuri.services.catalog_resolver import CatalogResult, ResolvedFestival


# --- Input ----------------------------------------------------------------

class MonetaryTierIn(BaseModel):
    type: Literal["monetary"]
    name: str = Field(min_length=1, max_length=200)
    amount: int = Field(gt=0)
    perks: str | list[str] = ""

    def to_draft(self) -> MonetaryTierDraft:
        return MonetaryTierDraft(name=self.name, amount=self.amount, perks=self.perks)


class InKindTierIn(BaseModel):
    type: Literal["in-kind"]
    name: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1, max_length=2000)
    value: int | None = Field(None, ge=0)
    perks: str | list[str] = ""

    def to_draft(self) -> InKindTierDraft:
        return InKindTierDraft(
            name=self.name, description=self.description,
            value=self.value, perks=self.perks,
        )


class ServiceTierIn(BaseModel):
    type: Literal["service"]
    name: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1, max_length=2000)
    value: int | None = Field(None, ge=0)
    perks: str | list[str] = ""

    def to_draft(self) -> ServiceTierDraft:
        return ServiceTierDraft(
            name=self.name, description=self.description,
            value=self.value, perks=self.perks,
        )


TierIn = Annotated[
    Union[MonetaryTierIn, InKindTierIn, ServiceTierIn],
    Field(discriminator="type"),
]


class FestivalDraftIn(BaseModel):
    """Organizer submission (sent as the `draft` JSON part of a multipart form)."""
    name: str = Field(min_length=1, max_length=200)
    location: str = Field(min_length=1, max_length=200)
    date: str = Field(min_length=1, max_length=200)
    region: Region
    attendance: int = Field(ge=0)
    description: str = Field(min_length=1, max_length=80)
    long_description: str = Field(min_length=1)
    funding_type: FundingType = FundingType.OPEN
    funding_goal: int = Field(0, ge=0)
    tiers: list[TierIn] = Field(min_length=1)

    def to_draft(self) -> FestivalDraft:
        return FestivalDraft(
            name=self.name,
            location=self.location,
            date=self.date,
            region=self.region,
            attendance=self.attendance,
            description=self.description,
            long_description=self.long_description,
            funding_type=self.funding_type,
            funding_goal=self.funding_goal,
        )

    def tier_drafts(self) -> list[TierDraft]:
        return [t.to_draft() for t in self.tiers]


# --- Output ---------------------------------------------------------------

class TierOut(BaseModel):
    id: UUID
    name: str
    type: TierType
    amount: int
    description: str | None = None
    value: int | None = None
    perks: list[str] = []
    headline: str

    @classmethod
    def from_record(cls, tier: TierRecord) -> "TierOut":
        return cls(
            id=tier.id,
            name=tier.name,
            type=tier.type,
            amount=tier.amount,
            description=tier.description,
            value=tier.value,
            perks=list(tier.perks),
            headline=tier_headline(tier),
        )


class SponsorOut(BaseModel):
    id: UUID
    company_name: str
    logo_url: str
    tier_name: str | None = None

    @classmethod
    def from_record(cls, sponsor: SponsorRecord) -> "SponsorOut":
        return cls(
            id=sponsor.id,
            company_name=sponsor.company_name,
            logo_url=sponsor.logo_url,
            tier_name=sponsor.tier_name,
        )


class FundingOut(BaseModel):
    goal_based: bool
    current: int
    goal: int
    percentage: float


class FestivalOut(BaseModel):
    id: UUID
    name: str
    location: str
    date: str
    region: str
    attendance: int
    description: str
    long_description: str
    image_url: str
    funding_type: FundingType
    funding: FundingOut
    minimum_sponsorship: int | None
    minimum_sponsorship_label: str
    tiers: list[TierOut] = []
    created_at: datetime

    @classmethod
    def from_resolved(
        cls, resolved: ResolvedFestival, tiers: list[TierRecord] | None = None,
    ) -> "FestivalOut":
        record = resolved.festival
        minimum = resolved.minimum_sponsorship
        tier_records = record.tiers if tiers is None else tiers
        return cls(
            id=record.id,
            name=record.name,
            location=record.location,
            date=record.date,
            region=record.region,
            attendance=record.attendance,
            description=record.description,
            long_description=record.long_description,
            image_url=resolved.display_image_url,
            funding_type=record.funding_type,
            funding=FundingOut(
                goal_based=resolved.funding.goal_based,
                current=resolved.funding.current,
                goal=resolved.funding.goal,
                percentage=resolved.funding.percentage,
            ),
            minimum_sponsorship=None if minimum is NO_MINIMUM else minimum,
            minimum_sponsorship_label=format_minimum(minimum),
            tiers=[TierOut.from_record(t) for t in tier_records],
            created_at=record.created_at,
        )


class CatalogResponse(BaseModel):
    state: CatalogState
    error: str | None = None
    festivals: list[FestivalOut] = []

    @classmethod
    def from_result(cls, result: CatalogResult) -> "CatalogResponse":
        return cls(
            state=result.state,
            error=result.error,
            festivals=[FestivalOut.from_resolved(f) for f in result.festivals],
        )


class RegionsResponse(BaseModel):
    regions: list[str]


class FestivalDetailResponse(BaseModel):
    festival: FestivalOut
    sponsors: list[SponsorOut] = []


class FestivalCreatedResponse(BaseModel):
    festival_id: UUID
    image_path: str
    tier_count: int
