"""Funding Aggregator — progress percentage and minimum tier."""

import uuid
from datetime import datetime, timezone

from matsuri.core.domain_types import FundingType, TierType
from matsuri.core.funding import (
    INQUIRE_LABEL, NO_MINIMUM, format_minimum, funding_summary,
    minimum_monetary_tier, progress_percentage,
)
from matsuri.core.records import FestivalRecord, TierRecord


def _tier(type, amount=0):
    return TierRecord(
        id=uuid.uuid4(), festival_id=uuid.uuid4(),
        name="t", type=type, amount=amount,
    )


def _festival(funding_type, goal, current):
    return FestivalRecord(
        id=uuid.uuid4(), name="n", location="l", date="d", region="関東",
        attendance=0, description="s", long_description="l", image_url=None,
        funding_type=funding_type, funding_goal=goal, current_funding=current,
        created_at=datetime.now(timezone.utc),
    )


def test_progress_percentage_zero_goal_is_zero():
    assert progress_percentage(500, 0) == 0
    assert progress_percentage(500, -10) == 0


def test_progress_percentage_regular_ratio():
    assert progress_percentage(250_000, 1_000_000) == 25.0


def test_progress_percentage_clamps_to_bounds():
    assert progress_percentage(2_000_000, 1_000_000) == 100.0
    assert progress_percentage(-5, 100) == 0.0


def test_minimum_ignores_non_monetary_and_zero_amounts():
    tiers = [
        _tier(TierType.MONETARY, 100_000),
        _tier(TierType.MONETARY, 30_000),
        _tier(TierType.MONETARY, 0),
        _tier(TierType.IN_KIND),
        _tier(TierType.SERVICE),
    ]
    assert minimum_monetary_tier(tiers) == 30_000


def test_minimum_without_monetary_tiers_is_sentinel():
    assert minimum_monetary_tier([_tier(TierType.IN_KIND)]) is NO_MINIMUM
    assert minimum_monetary_tier([]) is NO_MINIMUM


def test_sentinel_is_not_an_amount():
    assert NO_MINIMUM != 0
    assert not NO_MINIMUM
    assert repr(NO_MINIMUM) == "NO_MINIMUM"


def test_format_minimum():
    assert format_minimum(NO_MINIMUM) == INQUIRE_LABEL
    assert format_minimum(30_000) == "¥30,000"


def test_open_festival_summary_is_all_zero():
    summary = funding_summary(_festival(FundingType.OPEN, 0, 0))
    assert not summary.goal_based
    assert (summary.current, summary.goal, summary.percentage) == (0, 0, 0.0)


def test_goal_based_summary_reports_progress():
    summary = funding_summary(_festival(FundingType.GOAL_BASED, 400_000, 100_000))
    assert summary.goal_based
    assert summary.percentage == 25.0


def test_progress_percentage_reference_points():
    assert progress_percentage(0, 100) == 0
    assert progress_percentage(100, 100) == 100
    assert progress_percentage(150, 100) == 100
    assert progress_percentage(42, 0) == 0


def test_minimum_reference_points():
    assert minimum_monetary_tier([_tier(TierType.MONETARY, 5000), _tier(TierType.IN_KIND)]) == 5000
