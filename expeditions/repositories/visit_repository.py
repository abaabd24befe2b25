"""
Visit Repository.

Data access layer for daily visit counters.
"""

from datetime import datetime

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from expeditions.models.visit import Visit
from expeditions.repositories.base import BaseRepository


class VisitRepository(BaseRepository[Visit]):
    """Repository for visit operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository."""
        super().__init__(Visit, session)

    async def get_for_campaign(
        self, address: str, campaign_id: int
    ) -> Visit | None:
        """Get the visit record of an address in a campaign."""
        stmt = (
            select(Visit)
            .where(Visit.address == address, Visit.campaign_id == campaign_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def increment_if_before(
        self, visit_id: int, day_start: datetime, now: datetime
    ) -> bool:
        """
        Atomically credit a visit unless one was already credited today.

        A single conditional UPDATE, so concurrent same-day requests
        increment at most once.

        Args:
            visit_id: Visit record ID
            day_start: Midnight UTC of the current day
            now: Visit timestamp to store

        Returns:
            True if the counter was incremented
        """
        stmt = (
            update(Visit)
            .where(
                Visit.id == visit_id,
                or_(Visit.last_visit.is_(None), Visit.last_visit < day_start),
            )
            .values(all_visits=Visit.all_visits + 1, last_visit=now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0
