"""
Fragment claim engine.

Computes and persists claimable fragments exactly once per task period:
daily visits through the visit tracker, weekly liquidity tasks through
week-bucketed WeeklyFragment records.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from expeditions.config.constants import STREAK_WEEKS, VISIT_FRAGMENTS
from expeditions.models.enums import TaskType
from expeditions.repositories.weekly_fragment_repository import (
    WeeklyFragmentRepository,
)
from expeditions.services.base_service import BaseService, transaction
from expeditions.services.subgraph.types import PositionReader
from expeditions.services.tasks.fragment_calculator import FragmentCalculator
from expeditions.services.tasks.types import ClaimResult
from expeditions.services.visit_service import VisitService
from expeditions.utils.datetime_utils import ensure_utc, to_timestamp, utc_now
from expeditions.utils.exceptions import (
    AlreadyClaimed,
    ExternalSourceUnavailable,
    NoClaimableFragments,
)
from expeditions.utils.security import mask_address
from expeditions.utils.week_utils import WeekInformation, get_week_information


class ClaimEngine(BaseService):
    """
    Claim engine for task fragments.

    Weekly buckets move UNCLAIMED -> CLAIMED once; the unique constraint on
    (address, campaign, type, week, year) decides concurrent claims.
    """

    def __init__(
        self,
        session: AsyncSession,
        position_reader: PositionReader,
        calculator: FragmentCalculator | None = None,
    ) -> None:
        """
        Initialize claim engine.

        Args:
            session: Async database session
            position_reader: Source of weekly liquidity positions
            calculator: Fragment calculator (default threshold if omitted)
        """
        super().__init__(session)
        self.position_reader = position_reader
        self.calculator = calculator or FragmentCalculator()
        self.repo = WeeklyFragmentRepository(session)
        self.visit_service = VisitService(session)

    async def claim(
        self,
        address: str,
        campaign_id: int,
        task_type: TaskType,
        now: datetime | None = None,
    ) -> ClaimResult:
        """
        Claim fragments of a task.

        Args:
            address: Checksummed wallet address
            campaign_id: Active campaign ID
            task_type: Task to claim
            now: Claim instant (defaults to current UTC time)

        Returns:
            Claimed task and fragments

        Raises:
            AlreadyClaimed: Weekly bucket already claimed
            NoClaimableFragments: Weekly activity below threshold
            ExternalSourceUnavailable: Positions could not be read
        """
        now = ensure_utc(now or utc_now())

        if not task_type.is_weekly:
            await self.visit_service.register_visit(address, campaign_id, now)
            return ClaimResult(type=TaskType.VISIT, claimed_fragments=VISIT_FRAGMENTS)

        return await self._claim_weekly(address, campaign_id, task_type, now)

    @transaction
    async def _claim_weekly(
        self,
        address: str,
        campaign_id: int,
        task_type: TaskType,
        now: datetime,
    ) -> ClaimResult:
        """Claim a weekly liquidity task for the week containing ``now``."""
        week = get_week_information(now)

        existing = await self.repo.get_for_week(
            address, campaign_id, task_type.value, week.week_number, week.year
        )
        if existing is not None:
            raise AlreadyClaimed.for_week(task_type.value, week.week_date)

        total_usd = await self._weekly_usd(address, task_type, week)
        if not self.calculator.is_claimable(total_usd):
            self.logger.info(
                f"{task_type.value} for {mask_address(address)} in {week.week_date}: "
                f"{total_usd} USD below threshold"
            )
            raise NoClaimableFragments()

        base = self.calculator.base_fragments(total_usd)
        streak = await self._streak_fragments(address, campaign_id, task_type, week)
        fragments = self.calculator.apply_streak_bonus(base, streak)

        try:
            await self.repo.create(
                address=address,
                campaign_id=campaign_id,
                type=task_type.value,
                week=week.week_number,
                year=week.year,
                fragments=fragments,
            )
        except IntegrityError as e:
            # A concurrent claim for the same bucket committed first
            raise AlreadyClaimed.for_week(task_type.value, week.week_date) from e

        self.logger.info(
            f"Claimed {fragments} {task_type.value} fragments for "
            f"{mask_address(address)} in {week.week_date} "
            f"(base={base}, streak={'yes' if streak else 'no'})"
        )
        return ClaimResult(type=task_type, claimed_fragments=fragments)

    async def _weekly_usd(
        self, address: str, task_type: TaskType, week: WeekInformation
    ) -> Decimal:
        """Read the week's positions and value them in USD."""
        timestamp_a = to_timestamp(week.start_date)
        timestamp_b = to_timestamp(week.end_date)

        positions: list[dict[str, Any]]
        if task_type == TaskType.LIQUIDITY_PROVISION:
            positions = await self.position_reader.get_liquidity_position_deposits_between(
                address, timestamp_a, timestamp_b
            )
        else:
            positions = await self.position_reader.get_liquidity_staking_positions_between(
                address, timestamp_a, timestamp_b
            )

        try:
            return self.calculator.positions_usd(task_type, positions)
        except (KeyError, TypeError, ValueError) as e:
            self.logger.warning(f"Malformed {task_type.value} positions: {e!r}")
            raise ExternalSourceUnavailable(
                "External data source returned malformed positions"
            ) from e

    async def _streak_fragments(
        self,
        address: str,
        campaign_id: int,
        task_type: TaskType,
        week: WeekInformation,
    ) -> list[int] | None:
        """
        Get fragments of the previous weeks when all of them were claimed.

        Returns:
            Fragments of week-1, week-2, ... or None if the streak is broken
        """
        previous = [week.shift(-offset) for offset in range(1, STREAK_WEEKS + 1)]
        claims = await self.repo.get_for_weeks(
            address,
            campaign_id,
            task_type.value,
            [(prev.week_number, prev.year) for prev in previous],
        )

        if len(claims) < len(previous):
            return None
        return [claims[(prev.week_number, prev.year)].fragments for prev in previous]
