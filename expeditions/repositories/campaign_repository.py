"""
Campaign Repository.

Read access to campaign configuration.
"""

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from expeditions.models.campaign import Campaign
from expeditions.repositories.base import BaseRepository


class CampaignRepository(BaseRepository[Campaign]):
    """Repository for campaign operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository."""
        super().__init__(Campaign, session)

    async def find_active(self, now: datetime) -> list[Campaign]:
        """
        Get campaigns whose [start_date, end_date] contains ``now``.

        Ordered by start date, then id, so the first element is the
        deterministic winner when campaigns overlap.

        Args:
            now: Reference instant

        Returns:
            Active campaigns
        """
        stmt = (
            select(Campaign)
            .where(Campaign.start_date <= now, Campaign.end_date >= now)
            .order_by(Campaign.start_date.asc(), Campaign.id.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
