"""Sponsorship Tiers — perk splitting, per-variant validation, row building."""

import uuid

import pytest

from matsuri.core.domain_types import TierType
from matsuri.core.errors import ValidationError
from matsuri.core.records import TierRecord
from matsuri.core.tiers import (
    InKindTierDraft, MonetaryTierDraft, ServiceTierDraft,
    split_perks, tier_headline, tier_row, validate_tier_draft,
)


def test_split_perks_drops_blank_lines():
    assert split_perks("Logo on banner\n\n  \nVIP seats\r\n") == ["Logo on banner", "VIP seats"]


def test_split_perks_accepts_lists_and_none():
    assert split_perks(["a", " ", "b "]) == ["a", "b"]
    assert split_perks(None) == []


def test_monetary_tier_requires_positive_amount():
    with pytest.raises(ValidationError) as exc:
        validate_tier_draft(MonetaryTierDraft(name="Gold", amount=0), 2)
    assert exc.value.field == "tiers[2].amount"


def test_in_kind_tier_requires_description():
    with pytest.raises(ValidationError) as exc:
        validate_tier_draft(InKindTierDraft(name="Drinks", description=" "), 0)
    assert exc.value.field == "tiers[0].description"


def test_tier_requires_name():
    with pytest.raises(ValidationError):
        validate_tier_draft(ServiceTierDraft(name="", description="Stage crew"), 0)


def test_monetary_row_has_no_description_or_value():
    festival_id = uuid.uuid4()
    row = tier_row(MonetaryTierDraft(name=" Gold ", amount=100_000, perks="A\n\nB"), festival_id)
    assert row == {
        "festival_id": festival_id,
        "name": "Gold",
        "type": "monetary",
        "perks": ["A", "B"],
        "amount": 100_000,
        "description": None,
        "value": None,
    }


def test_service_row_persists_zero_amount():
    row = tier_row(
        ServiceTierDraft(name="Crew", description="Stage crew", value=20_000),
        uuid.uuid4(),
    )
    assert row["type"] == "service"
    assert row["amount"] == 0
    assert row["value"] == 20_000


def test_headline_per_tier_type():
    fid = uuid.uuid4()
    money = TierRecord(id=uuid.uuid4(), festival_id=fid, name="G", type=TierType.MONETARY, amount=50_000)
    goods = TierRecord(
        id=uuid.uuid4(), festival_id=fid, name="D", type=TierType.IN_KIND,
        description="Drinks", value=10_000,
    )
    assert tier_headline(money) == "¥50,000"
    assert tier_headline(goods) == "Drinks (estimated value ¥10,000)"
