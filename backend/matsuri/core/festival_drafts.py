"""Festival Drafts — organizer submission validation and festival row building.

Invariants:
    - validate_submission runs before any network call and raises ValidationError
    - The region is one of the fixed Region values before any upload starts
    - An image asset is mandatory; at least one tier is mandatory
    - festival_row forces funding_goal = 0 and current_funding = 0 for open festivals
    - current_funding is 0 at creation for every funding type
    - The persisted image reference is folder-relative, never a URL

Design Decisions:
    - Row dicts (not ORM objects) cross the store boundary: the store owns mapping
"""

from dataclasses import dataclass

from matsuri.core.domain_types import FundingType, Region
from matsuri.core.errors import ValidationError
from matsuri.core.tiers import TierDraft, validate_tier_draft


SHORT_DESCRIPTION_MAX = 80


@dataclass
class UploadAsset:
    """A file the caller wants stored (festival image or sponsor logo)."""
    filename: str
    content: bytes
    content_type: str | None = None


@dataclass
class FestivalDraft:
    name: str
    location: str
    date: str
    region: Region
    attendance: int
    description: str
    long_description: str
    funding_type: FundingType = FundingType.OPEN
    funding_goal: int = 0


def validate_submission(
    draft: FestivalDraft,
    image: UploadAsset | None,
    tiers: list[TierDraft],
) -> None:
    """Check a creation request. Pure — raises ValidationError on the first problem."""
    if image is None or not image.content:
        raise ValidationError("A main festival image is required.", "image")
    for name in ("name", "location", "date", "description", "long_description"):
        value = getattr(draft, name)
        if not value or not value.strip():
            raise ValidationError(f"'{name}' must not be empty.", name)
    try:
        Region(draft.region)
    except ValueError:
        raise ValidationError(f"Unknown region '{draft.region}'.", "region")
    if len(draft.description) > SHORT_DESCRIPTION_MAX:
        raise ValidationError(
            f"Short description must be at most {SHORT_DESCRIPTION_MAX} characters.",
            "description",
        )
    if draft.attendance < 0:
        raise ValidationError("Attendance cannot be negative.", "attendance")
    if draft.funding_type == FundingType.GOAL_BASED and draft.funding_goal <= 0:
        raise ValidationError(
            "Goal-based festivals need a funding goal above 0.", "funding_goal",
        )
    if not tiers:
        raise ValidationError("At least one sponsorship tier is required.", "tiers")
    for index, tier in enumerate(tiers):
        validate_tier_draft(tier, index)


def festival_row(draft: FestivalDraft, image_path: str) -> dict:
    """Build the festivals row. Open festivals never carry a goal."""
    goal_based = draft.funding_type == FundingType.GOAL_BASED
    return {
        "name": draft.name.strip(),
        "location": draft.location.strip(),
        "date": draft.date.strip(),
        "region": Region(draft.region).value,
        "attendance": draft.attendance,
        "description": draft.description.strip(),
        "long_description": draft.long_description,
        "image_url": image_path,
        "funding_type": draft.funding_type.value,
        "funding_goal": draft.funding_goal if goal_based else 0,
        "current_funding": 0,
    }
