"""Festival ORM — a cataloged event seeking sponsorship.

Invariants:
    - id is UUID primary key, created_at is assigned at insert (never by callers)
    - image_url holds the RAW stored reference: full URL, bare filename, or
      folder-relative path depending on when the row was written
    - funding_goal and current_funding are 0 for open festivals

Design Decisions:
    - tiers loaded with selectin: the catalog grid needs every festival's tiers
      for the minimum-sponsorship label without N+1 queries
    - No cascade on tiers/sponsors: rows are never deleted within scope
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from matsuri.db.base import Base


class Festival(Base):
    """Festival row — owns sponsorship tiers and sponsors."""
    __tablename__ = "festivals"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    location: Mapped[str] = mapped_column(String(200), nullable=False)
    date: Mapped[str] = mapped_column(String(200), nullable=False)
    region: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    attendance: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    description: Mapped[str] = mapped_column(String(80), nullable=False)
    long_description: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    funding_type: Mapped[str] = mapped_column(
        String(20), nullable=False, default="open",
    )
    funding_goal: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    current_funding: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )

    # Relationships
    tiers: Mapped[list["SponsorshipTier"]] = relationship(
        "SponsorshipTier", back_populates="festival", lazy="selectin",
        order_by="SponsorshipTier.created_at",
    )
    sponsors: Mapped[list["Sponsor"]] = relationship(
        "Sponsor", back_populates="festival",
    )
