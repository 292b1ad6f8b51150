"""SQL Festival Store — SQLAlchemy implementation of the FestivalStore protocol.

Invariants:
    - Each insert method opens its own session and commits once (no cross-call transaction)
    - query_festivals: case-insensitive substring on name, exact region, created_at DESC
    - Blank search/region strings mean "no filter"
    - Returned values are core records, never ORM instances

Design Decisions:
    - icontains(autoescape=True): user-typed % and _ are matched literally
    - Sponsors carry their tier name via the joined tier relationship, mirroring
      the sponsors ⋈ sponsorship_tiers(name) read of the detail view
"""

import logging

from sqlalchemy import select

from matsuri.core.domain_types import (
    FestivalId, TierId, SponsorId, FundingType, TierType,
)
from matsuri.core.records import FestivalRecord, SponsorRecord, TierRecord
from matsuri.infrastructure.database import DatabaseSessionManager
from matsuri.models.festival import Festival
from matsuri.models.sponsor import Sponsor
from matsuri.models.sponsorship_tier import SponsorshipTier

logger = logging.getLogger(__name__)


def _tier_record(tier: SponsorshipTier) -> TierRecord:
    return TierRecord(
        id=TierId(tier.id),
        festival_id=FestivalId(tier.festival_id),
        name=tier.name,
        type=TierType(tier.type),
        amount=tier.amount or 0,
        description=tier.description,
        value=tier.value,
        perks=tuple(tier.perks or ()),
    )


def _festival_record(festival: Festival) -> FestivalRecord:
    return FestivalRecord(
        id=FestivalId(festival.id),
        name=festival.name,
        location=festival.location,
        date=festival.date,
        region=festival.region,
        attendance=festival.attendance,
        description=festival.description,
        long_description=festival.long_description,
        image_url=festival.image_url,
        funding_type=FundingType(festival.funding_type),
        funding_goal=festival.funding_goal or 0,
        current_funding=festival.current_funding or 0,
        created_at=festival.created_at,
        tiers=tuple(_tier_record(t) for t in festival.tiers),
    )


def _sponsor_record(sponsor: Sponsor) -> SponsorRecord:
    return SponsorRecord(
        id=SponsorId(sponsor.id),
        festival_id=FestivalId(sponsor.festival_id),
        sponsorship_tier_id=TierId(sponsor.sponsorship_tier_id),
        company_name=sponsor.company_name,
        logo_url=sponsor.logo_url,
        tier_name=sponsor.tier.name if sponsor.tier else None,
        created_at=sponsor.created_at,
    )


class SqlFestivalStore:
    """Row query/insert over the festivals, sponsorship_tiers and sponsors tables."""

    def __init__(self, db: DatabaseSessionManager):
        self.db = db

    async def query_festivals(
        self, search: str | None = None, region: str | None = None,
    ) -> list[FestivalRecord]:
        query = select(Festival).order_by(Festival.created_at.desc())
        if search and search.strip():
            query = query.where(
                Festival.name.icontains(search.strip(), autoescape=True),
            )
        if region and region.strip():
            query = query.where(Festival.region == region.strip())
        async with self.db.session() as session:
            result = await session.execute(query)
            return [_festival_record(f) for f in result.scalars().all()]

    async def get_festival(self, festival_id: FestivalId) -> FestivalRecord | None:
        async with self.db.session() as session:
            result = await session.execute(
                select(Festival).where(Festival.id == festival_id),
            )
            festival = result.scalar_one_or_none()
            return _festival_record(festival) if festival else None

    async def list_regions(self) -> list[str]:
        async with self.db.session() as session:
            result = await session.execute(select(Festival.region).distinct())
            return sorted({r for r in result.scalars().all() if r})

    async def list_tiers(self, festival_id: FestivalId) -> list[TierRecord]:
        async with self.db.session() as session:
            result = await session.execute(
                select(SponsorshipTier)
                .where(SponsorshipTier.festival_id == festival_id)
                .order_by(SponsorshipTier.created_at),
            )
            return [_tier_record(t) for t in result.scalars().all()]

    async def list_sponsors(self, festival_id: FestivalId) -> list[SponsorRecord]:
        async with self.db.session() as session:
            result = await session.execute(
                select(Sponsor)
                .where(Sponsor.festival_id == festival_id)
                .order_by(Sponsor.created_at),
            )
            return [_sponsor_record(s) for s in result.scalars().all()]

    async def insert_festival(self, row: dict) -> FestivalRecord:
        async with self.db.session() as session:
            festival = Festival(**row)
            session.add(festival)
            await session.commit()
            await session.refresh(festival, attribute_names=["tiers"])
            logger.info(
                "Festival inserted", extra={"festival_id": str(festival.id)},
            )
            return _festival_record(festival)

    async def insert_tiers(self, rows: list[dict]) -> list[TierRecord]:
        async with self.db.session() as session:
            tiers = [SponsorshipTier(**row) for row in rows]
            session.add_all(tiers)
            await session.commit()
            return [_tier_record(t) for t in tiers]

    async def insert_sponsor(self, row: dict) -> SponsorRecord:
        async with self.db.session() as session:
            sponsor = Sponsor(**row)
            session.add(sponsor)
            await session.commit()
            await session.refresh(sponsor, attribute_names=["tier"])
            logger.info(
                "Sponsor inserted",
                extra={"festival_id": str(sponsor.festival_id)},
            )
            return _sponsor_record(sponsor)
