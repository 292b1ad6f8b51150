"""Festival Drafts — submission validation order and festival row building."""

import pytest

from matsuri.core.domain_types import FundingType, Region
from matsuri.core.errors import ValidationError
from matsuri.core.festival_drafts import (
    FestivalDraft, UploadAsset, festival_row, validate_submission,
)
from matsuri.core.tiers import MonetaryTierDraft

IMAGE = UploadAsset(filename="photo.jpg", content=b"\xff\xd8", content_type="image/jpeg")
TIERS = [MonetaryTierDraft(name="Gold", amount=100_000)]


def _draft(**overrides):
    fields = dict(
        name="祇園祭", location="Kyoto", date="2025-07-17", region=Region.KANSAI,
        attendance=1_000_000, description="Kyoto's summer festival",
        long_description="A month-long festival.",
    )
    fields.update(overrides)
    return FestivalDraft(**fields)


def test_missing_image_is_first_error():
    with pytest.raises(ValidationError) as exc:
        validate_submission(_draft(name=""), None, [])
    assert exc.value.field == "image"


def test_empty_image_content_counts_as_missing():
    with pytest.raises(ValidationError) as exc:
        validate_submission(_draft(), UploadAsset("a.jpg", b""), TIERS)
    assert exc.value.field == "image"


def test_short_description_limit():
    with pytest.raises(ValidationError) as exc:
        validate_submission(_draft(description="x" * 81), IMAGE, TIERS)
    assert exc.value.field == "description"


def test_at_least_one_tier_required():
    with pytest.raises(ValidationError) as exc:
        validate_submission(_draft(), IMAGE, [])
    assert exc.value.field == "tiers"


def test_goal_based_needs_positive_goal():
    with pytest.raises(ValidationError) as exc:
        validate_submission(
            _draft(funding_type=FundingType.GOAL_BASED, funding_goal=0), IMAGE, TIERS,
        )
    assert exc.value.field == "funding_goal"


def test_valid_submission_passes():
    validate_submission(_draft(), IMAGE, TIERS)


def test_open_festival_row_forces_zero_goal():
    row = festival_row(_draft(funding_goal=500_000), "festival-images/festival_x.jpg")
    assert row["funding_type"] == "open"
    assert row["funding_goal"] == 0
    assert row["current_funding"] == 0
    assert row["image_url"] == "festival-images/festival_x.jpg"
    assert row["region"] == "関西"


def test_goal_based_row_keeps_goal_with_zero_current():
    row = festival_row(
        _draft(funding_type=FundingType.GOAL_BASED, funding_goal=500_000), "p",
    )
    assert row["funding_goal"] == 500_000
    assert row["current_funding"] == 0


def test_unknown_region_is_a_validation_error():
    with pytest.raises(ValidationError) as exc:
        validate_submission(_draft(region="Atlantis"), IMAGE, TIERS)
    assert exc.value.field == "region"


def test_region_accepts_plain_string_value():
    validate_submission(_draft(region="関西"), IMAGE, TIERS)
