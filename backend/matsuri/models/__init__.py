"""ORM Models — SQLAlchemy declarative models for festivals, tiers, sponsors.

Invariants:
    - All models inherit from Base (db/base.py)
    - Festival is the owner; tiers and sponsors are scoped by festival_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from matsuri.models.festival import Festival  # noqa: F401
from matsuri.models.sponsorship_tier import SponsorshipTier  # noqa: F401
from matsuri.models.sponsor import Sponsor  # noqa: F401
