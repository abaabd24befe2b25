"""
Tasks service.

Entry point for signed wallet requests: verifies the signature, resolves the
active campaign and hands the claim to the engine.
"""

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from expeditions.config.constants import DAILY_VISIT_MESSAGE
from expeditions.models.enums import TaskType
from expeditions.repositories.weekly_fragment_repository import (
    WeeklyFragmentRepository,
)
from expeditions.services.base_service import BaseService
from expeditions.services.campaign_service import CampaignService
from expeditions.services.signature_service import SignatureService
from expeditions.services.subgraph.types import PositionReader
from expeditions.services.tasks.claim_engine import ClaimEngine
from expeditions.services.tasks.fragment_calculator import FragmentCalculator
from expeditions.services.tasks.types import ClaimResult, WeeklyFragmentsSummary
from expeditions.services.visit_service import VisitService, VisitState
from expeditions.utils.datetime_utils import ensure_utc, utc_now
from expeditions.utils.exceptions import NoActiveCampaign
from expeditions.utils.week_utils import get_week_information, parse_week_date


class TasksService(BaseService):
    """Signed task claims and task state queries."""

    def __init__(
        self,
        session: AsyncSession,
        position_reader: PositionReader,
        calculator: FragmentCalculator | None = None,
        daily_visit_message: str = DAILY_VISIT_MESSAGE,
    ) -> None:
        """
        Initialize tasks service.

        Args:
            session: Async database session
            position_reader: Source of weekly liquidity positions
            calculator: Fragment calculator
            daily_visit_message: Message signed on the daily-visit endpoint
        """
        super().__init__(session)
        self.daily_visit_message = daily_visit_message
        self.signatures = SignatureService()
        self.campaigns = CampaignService(session)
        self.visits = VisitService(session)
        self.engine = ClaimEngine(session, position_reader, calculator)
        self.fragments_repo = WeeklyFragmentRepository(session)

    async def claim(
        self,
        signature: str,
        address: str,
        task_type: TaskType,
        now: datetime | None = None,
    ) -> ClaimResult:
        """
        Claim a task for a signed request.

        The wallet signs the task type name.

        Raises:
            InvalidSignature: Signer is not ``address``
            NoActiveCampaign: No campaign is running
        """
        signer = self.signatures.recover_address(
            task_type.value, signature, expected_address=address
        )
        now = ensure_utc(now or utc_now())
        campaign = await self.campaigns.find_active_campaign(now)
        return await self.engine.claim(signer, campaign.id, task_type, now)

    async def claim_daily_visit(
        self,
        signature: str,
        address: str | None = None,
        now: datetime | None = None,
    ) -> VisitState:
        """
        Credit today's visit of the wallet that signed the daily-visit message.

        Args:
            signature: Signature of the daily-visit message
            address: Claimed wallet, must be the signer when given
            now: Visit instant (defaults to current UTC time)

        Returns:
            Updated visit state

        Raises:
            InvalidSignature: Signer is not ``address``
            NoActiveCampaign: No campaign is running
        """
        signer = self.signatures.recover_address(
            self.daily_visit_message, signature, expected_address=address
        )
        now = ensure_utc(now or utc_now())
        campaign = await self.campaigns.find_active_campaign(now)
        return await self.visits.register_visit(signer, campaign.id, now)

    async def get_daily_visits(
        self, address: str, now: datetime | None = None
    ) -> VisitState:
        """
        Get visit state of an address in the active campaign.

        Without an active campaign nobody has visits, so the default state
        is returned.
        """
        try:
            campaign = await self.campaigns.find_active_campaign(now)
        except NoActiveCampaign:
            return VisitState(address=address)
        return await self.visits.get_visits(address, campaign.id)

    async def get_weekly_fragments(
        self,
        address: str,
        week: str | None = None,
        now: datetime | None = None,
    ) -> WeeklyFragmentsSummary:
        """
        Get weekly fragments of an address.

        Args:
            address: Checksummed wallet address
            week: ``YYYY-Www`` label, current week when omitted
            now: Reference instant for the campaign and current week

        Raises:
            ValueError: If ``week`` is malformed
        """
        week_info = parse_week_date(week) if week else get_week_information(now)

        try:
            campaign = await self.campaigns.find_active_campaign(now)
        except NoActiveCampaign:
            return WeeklyFragmentsSummary(address=address, week_date=week_info.week_date)

        claims = await self.fragments_repo.find_for_week(
            address, campaign.id, week_info.week_number, week_info.year
        )
        return WeeklyFragmentsSummary(
            address=address,
            week_date=week_info.week_date,
            fragments={TaskType(claim.type): claim.fragments for claim in claims},
        )
