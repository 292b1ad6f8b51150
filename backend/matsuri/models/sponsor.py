"""Sponsor ORM — a company that pledged to one tier of one festival.

Invariants:
    - References both the tier and the festival (festival_id denormalized)
    - logo_url is a permanent public URL, never a signed one
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from matsuri.db.base import Base


class Sponsor(Base):
    """Sponsor entity — created by the pledge flow, never updated."""
    __tablename__ = "sponsors"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    company_name: Mapped[str] = mapped_column(String(200), nullable=False)
    logo_url: Mapped[str] = mapped_column(String(2000), nullable=False)
    sponsorship_tier_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("sponsorship_tiers.id"), nullable=False,
    )
    festival_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("festivals.id"), nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    festival: Mapped["Festival"] = relationship(
        "Festival", back_populates="sponsors",
    )
    tier: Mapped["SponsorshipTier"] = relationship(
        "SponsorshipTier", lazy="joined",
    )
