"""Pledge Rules — pledge request validation and sponsor row building.

Invariants:
    - A logo asset is mandatory; validation raises before any network call
    - The contact email is echoed in the confirmation, never persisted
    - sponsor_row never touches the festival's current_funding
"""

from dataclasses import dataclass

from matsuri.core.domain_types import FestivalId, TierId
from matsuri.core.errors import ValidationError
from matsuri.core.festival_drafts import UploadAsset


@dataclass
class PledgeRequest:
    festival_id: FestivalId
    tier_id: TierId
    company_name: str
    email: str
    logo: UploadAsset | None


def validate_pledge(request: PledgeRequest) -> None:
    if request.logo is None or not request.logo.content:
        raise ValidationError("Please upload your company logo.", "logo")
    if not request.company_name or not request.company_name.strip():
        raise ValidationError("Company name must not be empty.", "company_name")
    email = (request.email or "").strip()
    if "@" not in email or email.startswith("@") or email.endswith("@"):
        raise ValidationError("A valid contact email is required.", "email")


def sponsor_row(request: PledgeRequest, logo_url: str) -> dict:
    return {
        "company_name": request.company_name.strip(),
        "logo_url": logo_url,
        "sponsorship_tier_id": request.tier_id,
        "festival_id": request.festival_id,
    }


def confirmation_message(company_name: str, tier_name: str, email: str) -> str:
    return (
        f"Thank you, {company_name.strip()}. Your pledge for the "
        f"'{tier_name}' tier has been received. We will contact you at "
        f"{email.strip()} about next steps."
    )
