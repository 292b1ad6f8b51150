"""SponsorshipTier ORM — a named offer level a festival defines.

Invariants:
    - Always belongs to a Festival (festival_id FK)
    - type is one of: monetary, in-kind, service
    - amount > 0 iff monetary; description/value used iff in-kind or service
    - perks is a JSON array of non-blank strings, in submission order
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, DateTime, ForeignKey, JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from matsuri.db.base import Base


class SponsorshipTier(Base):
    """Tier entity — one sponsorship offer of a festival."""
    __tablename__ = "sponsorship_tiers"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    festival_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("festivals.id"), nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    amount: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    value: Mapped[int | None] = mapped_column(Integer, nullable=True)
    perks: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    festival: Mapped["Festival"] = relationship(
        "Festival", back_populates="tiers",
    )
