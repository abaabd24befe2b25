"""
Visit model.

Daily visit counter of an address within a campaign.
"""

from datetime import UTC, datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from expeditions.models.base import Base


class Visit(Base):
    """
    Visit entity.

    One record per (address, campaign). ``all_visits`` grows by at most one
    per UTC calendar day; ``last_visit`` is the last credited visit.
    """

    __tablename__ = "visits"
    __table_args__ = (
        UniqueConstraint("address", "campaign_id", name="uq_visits_address_campaign"),
        CheckConstraint("all_visits >= 0", name="check_visits_non_negative"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    address: Mapped[str] = mapped_column(String(42), nullable=False, index=True)

    campaign_id: Mapped[int] = mapped_column(
        ForeignKey("campaigns.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    all_visits: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    last_visit: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<Visit(id={self.id}, campaign_id={self.campaign_id}, "
            f"all_visits={self.all_visits})>"
        )
