"""Initial schema — festivals, sponsorship_tiers, sponsors.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "festivals",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("location", sa.String(200), nullable=False),
        sa.Column("date", sa.String(200), nullable=False),
        sa.Column("region", sa.String(20), nullable=False),
        sa.Column("attendance", sa.Integer, nullable=False, server_default="0"),
        sa.Column("description", sa.String(80), nullable=False),
        sa.Column("long_description", sa.Text, nullable=False),
        sa.Column("image_url", sa.String(2000), nullable=True),
        sa.Column("funding_type", sa.String(20), nullable=False, server_default="open"),
        sa.Column("funding_goal", sa.Integer, nullable=False, server_default="0"),
        sa.Column("current_funding", sa.Integer, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_festivals_region", "festivals", ["region"])
    op.create_index("ix_festivals_created_at", "festivals", ["created_at"])

    op.create_table(
        "sponsorship_tiers",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("festival_id", UUID(as_uuid=True), sa.ForeignKey("festivals.id"), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("amount", sa.Integer, nullable=False, server_default="0"),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("value", sa.Integer, nullable=True),
        sa.Column("perks", sa.JSON, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_sponsorship_tiers_festival_id", "sponsorship_tiers", ["festival_id"])

    op.create_table(
        "sponsors",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("company_name", sa.String(200), nullable=False),
        sa.Column("logo_url", sa.String(2000), nullable=False),
        sa.Column("sponsorship_tier_id", UUID(as_uuid=True), sa.ForeignKey("sponsorship_tiers.id"), nullable=False),
        sa.Column("festival_id", UUID(as_uuid=True), sa.ForeignKey("festivals.id"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_sponsors_festival_id", "sponsors", ["festival_id"])


def downgrade() -> None:
    op.drop_table("sponsors")
    op.drop_table("sponsorship_tiers")
    op.drop_table("festivals")
