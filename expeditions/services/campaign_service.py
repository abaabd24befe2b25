"""
Campaign service.

Resolves the campaign that claims are scoped to.
"""

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from expeditions.models.campaign import Campaign
from expeditions.repositories.campaign_repository import CampaignRepository
from expeditions.services.base_service import BaseService
from expeditions.utils.datetime_utils import ensure_utc, utc_now
from expeditions.utils.exceptions import DocumentNotFound, NoActiveCampaign


class CampaignService(BaseService):
    """Read-only access to campaigns."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service."""
        super().__init__(session)
        self.repo = CampaignRepository(session)

    async def find_active_campaign(self, now: datetime | None = None) -> Campaign:
        """
        Get the campaign active at ``now``.

        When campaigns overlap, the one that started first wins (lowest id
        on equal start dates).

        Args:
            now: Reference instant (defaults to current UTC time)

        Returns:
            Active campaign

        Raises:
            NoActiveCampaign: If no campaign covers ``now``
        """
        now = ensure_utc(now or utc_now())
        campaigns = await self.repo.find_active(now)

        if not campaigns:
            raise NoActiveCampaign()

        if len(campaigns) > 1:
            self.logger.warning(
                f"{len(campaigns)} overlapping active campaigns, "
                f"using campaign {campaigns[0].id}"
            )

        return campaigns[0]

    async def get_campaign(self, campaign_id: int) -> Campaign:
        """
        Get campaign by ID.

        Raises:
            DocumentNotFound: If the campaign does not exist
        """
        campaign = await self.repo.get_by_id(campaign_id)
        if campaign is None:
            raise DocumentNotFound(f"Campaign {campaign_id} not found")
        return campaign
