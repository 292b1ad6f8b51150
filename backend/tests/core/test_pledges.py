"""Pledge Rules — validation before any network call, row and message building."""

import uuid

import pytest

from matsuri.core.errors import ValidationError
from matsuri.core.festival_drafts import UploadAsset
from matsuri.core.pledges import (
    PledgeRequest, confirmation_message, sponsor_row, validate_pledge,
)

LOGO = UploadAsset(filename="logo.png", content=b"\x89PNG", content_type="image/png")


def _request(**overrides):
    fields = dict(
        festival_id=uuid.uuid4(), tier_id=uuid.uuid4(),
        company_name="Acme K.K.", email="pr@acme.example", logo=LOGO,
    )
    fields.update(overrides)
    return PledgeRequest(**fields)


def test_missing_logo_rejected():
    with pytest.raises(ValidationError) as exc:
        validate_pledge(_request(logo=None))
    assert exc.value.field == "logo"


@pytest.mark.parametrize("email", ["", "acme.example", "@acme.example", "pr@"])
def test_invalid_email_rejected(email):
    with pytest.raises(ValidationError) as exc:
        validate_pledge(_request(email=email))
    assert exc.value.field == "email"


def test_blank_company_rejected():
    with pytest.raises(ValidationError) as exc:
        validate_pledge(_request(company_name="  "))
    assert exc.value.field == "company_name"


def test_sponsor_row_has_no_email():
    request = _request(company_name=" Acme K.K. ")
    row = sponsor_row(request, "https://cdn/logo.png")
    assert row == {
        "company_name": "Acme K.K.",
        "logo_url": "https://cdn/logo.png",
        "sponsorship_tier_id": request.tier_id,
        "festival_id": request.festival_id,
    }


def test_confirmation_mentions_tier_and_email():
    message = confirmation_message("Acme", "Gold", "pr@acme.example")
    assert "Gold" in message
    assert "pr@acme.example" in message
