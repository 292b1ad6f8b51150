"""Store Records — immutable row projections returned by the FestivalStore.

Invariants:
    - Records are read-only snapshots; services never mutate them
    - FestivalRecord.image_url is the RAW stored reference (any historical encoding)
    - FestivalRecord.tiers may be empty (no-rollback creation can leave zero tiers)

Design Decisions:
    - Frozen dataclasses instead of ORM objects: core/ stays free of SQLAlchemy
"""

from dataclasses import dataclass, field
from datetime import datetime

from matsuri.core.domain_types import (
    FestivalId, TierId, SponsorId, FundingType, TierType,
)


@dataclass(frozen=True)
class TierRecord:
    id: TierId
    festival_id: FestivalId
    name: str
    type: TierType
    amount: int = 0
    description: str | None = None
    value: int | None = None
    perks: tuple[str, ...] = ()


@dataclass(frozen=True)
class SponsorRecord:
    id: SponsorId
    festival_id: FestivalId
    sponsorship_tier_id: TierId
    company_name: str
    logo_url: str
    tier_name: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class FestivalRecord:
    id: FestivalId
    name: str
    location: str
    date: str
    region: str
    attendance: int
    description: str
    long_description: str
    image_url: str | None
    funding_type: FundingType
    funding_goal: int
    current_funding: int
    created_at: datetime
    tiers: tuple[TierRecord, ...] = field(default=())
