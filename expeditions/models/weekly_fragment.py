"""
WeeklyFragment model.

Fragments claimed by an address for one weekly task in one ISO week.
Records are written once and never updated.
"""

from datetime import UTC, datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from expeditions.models.base import Base


class WeeklyFragment(Base):
    """
    WeeklyFragment entity.

    Attributes:
        id: Primary key
        address: Checksummed wallet address
        campaign_id: Campaign the claim belongs to
        type: Weekly task type (TaskType value)
        week: ISO week number
        year: ISO year
        fragments: Claimed fragments
        created_at: Claim timestamp
    """

    __tablename__ = "weekly_fragments"
    __table_args__ = (
        # Exactly one claim per bucket; concurrent claimers lose on this
        UniqueConstraint(
            "address",
            "campaign_id",
            "type",
            "week",
            "year",
            name="uq_weekly_fragments_bucket",
        ),
        CheckConstraint("fragments >= 0", name="check_weekly_fragments_non_negative"),
        Index("ix_weekly_fragments_address_campaign", "address", "campaign_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    address: Mapped[str] = mapped_column(String(42), nullable=False)

    campaign_id: Mapped[int] = mapped_column(
        ForeignKey("campaigns.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    type: Mapped[str] = mapped_column(String(32), nullable=False)

    week: Mapped[int] = mapped_column(Integer, nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)

    fragments: Mapped[int] = mapped_column(Integer, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<WeeklyFragment(id={self.id}, type={self.type}, "
            f"week={self.year}-{self.week}, fragments={self.fragments})>"
        )
