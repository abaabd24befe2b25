"""
Campaign model.

A time-boxed rewards program instance. Claims are scoped to the campaign
active at request time.
"""

from datetime import UTC, datetime

from sqlalchemy import CheckConstraint, DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from expeditions.models.base import Base


class Campaign(Base):
    """
    Campaign entity.

    Attributes:
        id: Primary key
        start_date: First instant of the campaign (inclusive)
        end_date: Last instant of the campaign (inclusive)
        redeem_end_date: Deadline for redeeming collected fragments
        initiator_address: Wallet that created the campaign
        created_at: Creation timestamp
    """

    __tablename__ = "campaigns"
    __table_args__ = (
        CheckConstraint("end_date >= start_date", name="check_campaign_dates"),
        Index("ix_campaigns_start_end", "start_date", "end_date"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    start_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    end_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    redeem_end_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )

    initiator_address: Mapped[str] = mapped_column(String(42), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<Campaign(id={self.id}, start={self.start_date}, "
            f"end={self.end_date})>"
        )
