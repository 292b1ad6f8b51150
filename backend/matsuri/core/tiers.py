"""Sponsorship Tiers — tagged tier variants, perk normalization, row building.

Invariants:
    - Every tier draft is exactly one of MonetaryTierDraft | InKindTierDraft | ServiceTierDraft
    - amount > 0 iff monetary; non-monetary rows always persist amount = 0
    - Perks are an ordered list of non-blank, stripped strings
    - Every match over TierType/TierDraft is exhaustive (assert_never)

Design Decisions:
    - Variant classes instead of one class with optional fields: the type decides
      which fields exist, so persistence and display never probe for presence
"""

from dataclasses import dataclass
from typing import ClassVar, assert_never

from matsuri.core.domain_types import FestivalId, TierType
from matsuri.core.errors import ValidationError
from matsuri.core.records import TierRecord


Perks = str | list[str]


@dataclass
class MonetaryTierDraft:
    name: str
    amount: int
    perks: Perks = ""
    type: ClassVar[TierType] = TierType.MONETARY


@dataclass
class InKindTierDraft:
    name: str
    description: str
    value: int | None = None
    perks: Perks = ""
    type: ClassVar[TierType] = TierType.IN_KIND


@dataclass
class ServiceTierDraft:
    name: str
    description: str
    value: int | None = None
    perks: Perks = ""
    type: ClassVar[TierType] = TierType.SERVICE


TierDraft = MonetaryTierDraft | InKindTierDraft | ServiceTierDraft


def split_perks(raw: Perks | None) -> list[str]:
    """Split free text on line breaks, dropping blank lines."""
    if raw is None:
        return []
    lines = raw.splitlines() if isinstance(raw, str) else list(raw)
    return [line.strip() for line in lines if line and line.strip()]


def validate_tier_draft(draft: TierDraft, index: int) -> None:
    """Raise ValidationError if the tier draft is unusable."""
    field_prefix = f"tiers[{index}]"
    if not draft.name or not draft.name.strip():
        raise ValidationError(
            f"Tier #{index + 1} needs a name.", f"{field_prefix}.name",
        )
    match draft:
        case MonetaryTierDraft():
            if draft.amount <= 0:
                raise ValidationError(
                    f"Tier '{draft.name}' is monetary and needs an amount above 0.",
                    f"{field_prefix}.amount",
                )
        case InKindTierDraft() | ServiceTierDraft():
            if not draft.description or not draft.description.strip():
                raise ValidationError(
                    f"Tier '{draft.name}' needs a description of what is offered.",
                    f"{field_prefix}.description",
                )
            if draft.value is not None and draft.value < 0:
                raise ValidationError(
                    f"Tier '{draft.name}' has a negative estimated value.",
                    f"{field_prefix}.value",
                )
        case _:
            assert_never(draft)


def tier_row(draft: TierDraft, festival_id: FestivalId) -> dict:
    """Build the sponsorship_tiers row for one draft."""
    row = {
        "festival_id": festival_id,
        "name": draft.name.strip(),
        "type": draft.type.value,
        "perks": split_perks(draft.perks),
    }
    match draft:
        case MonetaryTierDraft():
            row.update(amount=draft.amount, description=None, value=None)
        case InKindTierDraft() | ServiceTierDraft():
            row.update(
                amount=0,
                description=draft.description.strip(),
                value=draft.value,
            )
        case _:
            assert_never(draft)
    return row


def format_yen(amount: int) -> str:
    return f"¥{amount:,}"


def tier_headline(tier: TierRecord) -> str:
    """One-line summary shown on a tier card."""
    match tier.type:
        case TierType.MONETARY:
            return format_yen(tier.amount)
        case TierType.IN_KIND | TierType.SERVICE:
            headline = tier.description or ""
            if tier.value:
                headline += f" (estimated value {format_yen(tier.value)})"
            return headline
        case _:
            assert_never(tier.type)
