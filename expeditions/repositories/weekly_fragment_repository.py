"""
WeeklyFragment Repository.

Data access layer for weekly fragment claims.
"""

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from expeditions.models.weekly_fragment import WeeklyFragment
from expeditions.repositories.base import BaseRepository


class WeeklyFragmentRepository(BaseRepository[WeeklyFragment]):
    """Repository for weekly fragment operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository."""
        super().__init__(WeeklyFragment, session)

    async def get_for_week(
        self,
        address: str,
        campaign_id: int,
        task_type: str,
        week: int,
        year: int,
    ) -> WeeklyFragment | None:
        """Get the claim of one (address, campaign, type, week, year) bucket."""
        return await self.get_by(
            address=address,
            campaign_id=campaign_id,
            type=task_type,
            week=week,
            year=year,
        )

    async def get_for_weeks(
        self,
        address: str,
        campaign_id: int,
        task_type: str,
        weeks: list[tuple[int, int]],
    ) -> dict[tuple[int, int], WeeklyFragment]:
        """
        Get claims of one task type for several weeks.

        Args:
            address: Wallet address
            campaign_id: Campaign ID
            task_type: Weekly task type
            weeks: (week, year) pairs

        Returns:
            Mapping (week, year) -> claim, only for claimed weeks
        """
        if not weeks:
            return {}

        stmt = select(WeeklyFragment).where(
            WeeklyFragment.address == address,
            WeeklyFragment.campaign_id == campaign_id,
            WeeklyFragment.type == task_type,
            or_(
                *(
                    and_(WeeklyFragment.week == week, WeeklyFragment.year == year)
                    for week, year in weeks
                )
            ),
        )
        result = await self.session.execute(stmt)
        return {
            (fragment.week, fragment.year): fragment
            for fragment in result.scalars().all()
        }

    async def find_for_week(
        self, address: str, campaign_id: int, week: int, year: int
    ) -> list[WeeklyFragment]:
        """Get all claims of an address for a week, any task type."""
        return await self.find_by(
            address=address, campaign_id=campaign_id, week=week, year=year
        )
