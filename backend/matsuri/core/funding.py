"""Funding Aggregator — pure arithmetic over funding figures.

Invariants:
    - progress_percentage is always within [0, 100]; goal <= 0 yields 0
    - minimum_monetary_tier only considers monetary tiers with amount > 0
    - NO_MINIMUM is a dedicated sentinel, never confused with an amount

Design Decisions:
    - Sentinel object instead of None/0: 0 is a valid-looking amount and None
      reads as "not computed"; the sentinel renders as "inquire"
"""

from dataclasses import dataclass
from typing import Final, Iterable

from matsuri.core.domain_types import FundingType, TierType
from matsuri.core.records import FestivalRecord, TierRecord
from matsuri.core.tiers import format_yen


class _NoMinimum:
    """Sentinel for "no monetary tier to quote a minimum from"."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_MINIMUM"

    def __bool__(self) -> bool:
        return False


NO_MINIMUM: Final = _NoMinimum()

MinimumAmount = int | _NoMinimum

INQUIRE_LABEL = "inquire"


def progress_percentage(current: float, goal: float) -> float:
    """Percentage of goal reached, clamped to [0, 100]."""
    if goal <= 0:
        return 0.0
    return max(0.0, min(current / goal * 100, 100.0))


def minimum_monetary_tier(tiers: Iterable[TierRecord]) -> MinimumAmount:
    """Smallest positive monetary amount, or NO_MINIMUM."""
    amounts = [
        t.amount for t in tiers
        if t.type == TierType.MONETARY and t.amount > 0
    ]
    return min(amounts) if amounts else NO_MINIMUM


def format_minimum(value: MinimumAmount) -> str:
    if value is NO_MINIMUM:
        return INQUIRE_LABEL
    return format_yen(value)


@dataclass(frozen=True)
class FundingSummary:
    goal_based: bool
    current: int
    goal: int
    percentage: float


def funding_summary(festival: FestivalRecord) -> FundingSummary:
    """Display figures for a festival card/detail header."""
    goal_based = festival.funding_type == FundingType.GOAL_BASED
    if not goal_based:
        return FundingSummary(goal_based=False, current=0, goal=0, percentage=0.0)
    current = festival.current_funding or 0
    goal = festival.funding_goal or 0
    return FundingSummary(
        goal_based=True,
        current=current,
        goal=goal,
        percentage=progress_percentage(current, goal),
    )
