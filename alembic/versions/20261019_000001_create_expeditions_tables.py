"""Create campaigns, visits and weekly_fragments tables.

Revision ID: 20261019_000001_create_expeditions_tables
Revises:
Create Date: 2026-10-19

"""

from typing import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20261019_000001_create_expeditions_tables"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create expeditions tables."""
    op.create_table(
        "campaigns",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("redeem_end_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("initiator_address", sa.String(length=42), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.CheckConstraint("end_date >= start_date", name="check_campaign_dates"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_campaigns_start_end",
        "campaigns",
        ["start_date", "end_date"],
    )

    op.create_table(
        "visits",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("address", sa.String(length=42), nullable=False),
        sa.Column("campaign_id", sa.Integer(), nullable=False),
        sa.Column("all_visits", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("last_visit", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.ForeignKeyConstraint(
            ["campaign_id"],
            ["campaigns.id"],
            ondelete="CASCADE",
        ),
        sa.CheckConstraint("all_visits >= 0", name="check_visits_non_negative"),
        sa.UniqueConstraint(
            "address", "campaign_id", name="uq_visits_address_campaign"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_visits_address", "visits", ["address"])
    op.create_index("ix_visits_campaign_id", "visits", ["campaign_id"])

    op.create_table(
        "weekly_fragments",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("address", sa.String(length=42), nullable=False),
        sa.Column("campaign_id", sa.Integer(), nullable=False),
        sa.Column("type", sa.String(length=32), nullable=False),
        sa.Column("week", sa.Integer(), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("fragments", sa.Integer(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.ForeignKeyConstraint(
            ["campaign_id"],
            ["campaigns.id"],
            ondelete="CASCADE",
        ),
        sa.CheckConstraint(
            "fragments >= 0", name="check_weekly_fragments_non_negative"
        ),
        sa.UniqueConstraint(
            "address",
            "campaign_id",
            "type",
            "week",
            "year",
            name="uq_weekly_fragments_bucket",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_weekly_fragments_address_campaign",
        "weekly_fragments",
        ["address", "campaign_id"],
    )
    op.create_index(
        "ix_weekly_fragments_campaign_id",
        "weekly_fragments",
        ["campaign_id"],
    )


def downgrade() -> None:
    """Drop expeditions tables."""
    op.drop_index("ix_weekly_fragments_campaign_id", table_name="weekly_fragments")
    op.drop_index(
        "ix_weekly_fragments_address_campaign", table_name="weekly_fragments"
    )
    op.drop_table("weekly_fragments")
    op.drop_index("ix_visits_campaign_id", table_name="visits")
    op.drop_index("ix_visits_address", table_name="visits")
    op.drop_table("visits")
    op.drop_index("ix_campaigns_start_end", table_name="campaigns")
    op.drop_table("campaigns")
