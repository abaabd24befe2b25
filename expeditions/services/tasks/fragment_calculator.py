"""
Fragment calculator.

Pure calculation logic turning subgraph positions into fragments.
"""

from collections.abc import Iterable, Mapping
from decimal import ROUND_FLOOR, Decimal, InvalidOperation
from typing import Any

from loguru import logger

from expeditions.config.constants import MIN_CLAIMABLE_USD
from expeditions.models.enums import TaskType


def _to_decimal(value: Any) -> Decimal:
    """Convert a subgraph numeric (string or number) to Decimal."""
    try:
        return Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError) as e:
        raise ValueError(f"Invalid numeric value from subgraph: {value!r}") from e


class FragmentCalculator:
    """
    Fragment calculator for weekly liquidity tasks.

    1 USD-equivalent of weekly activity is worth 1 fragment, paid only when
    the week's total reaches ``min_claimable_usd``.
    """

    def __init__(self, min_claimable_usd: Decimal = MIN_CLAIMABLE_USD) -> None:
        """
        Initialize calculator.

        Args:
            min_claimable_usd: Weekly USD threshold for a claim
        """
        self.min_claimable_usd = min_claimable_usd

    def provision_usd(self, positions: Iterable[Mapping[str, Any]]) -> Decimal:
        """
        Sum USD value of liquidity deposits.

        Args:
            positions: Items with ``amountUSD``

        Returns:
            Total USD value
        """
        return sum(
            (_to_decimal(position["amountUSD"]) for position in positions),
            Decimal("0"),
        )

    def staking_usd(self, positions: Iterable[Mapping[str, Any]]) -> Decimal:
        """
        Sum USD value of staking deposits.

        Formula per position: amount / totalSupply * reserveUSD

        Positions of pairs with no supply are worth 0.

        Args:
            positions: Items with ``amount`` and
                ``liquidityMiningCampaign.stakablePair``

        Returns:
            Total USD value

        Example:
            >>> calc = FragmentCalculator()
            >>> calc.staking_usd([{
            ...     "amount": "5",
            ...     "liquidityMiningCampaign": {
            ...         "stakablePair": {"totalSupply": "10", "reserveUSD": "200"}
            ...     },
            ... }])
            Decimal('100.0')
        """
        total = Decimal("0")
        for position in positions:
            pair = position["liquidityMiningCampaign"]["stakablePair"]
            total_supply = _to_decimal(pair["totalSupply"])
            if total_supply <= 0:
                logger.warning("Skipping staking position of a pair without supply")
                continue
            amount = _to_decimal(position["amount"])
            reserve_usd = _to_decimal(pair["reserveUSD"])
            total += amount / total_supply * reserve_usd
        return total

    def positions_usd(
        self, task_type: TaskType, positions: Iterable[Mapping[str, Any]]
    ) -> Decimal:
        """USD value of positions for a weekly task type."""
        if task_type == TaskType.LIQUIDITY_PROVISION:
            return self.provision_usd(positions)
        if task_type == TaskType.LIQUIDITY_STAKING:
            return self.staking_usd(positions)
        raise ValueError(f"{task_type} is not a weekly task")

    def is_claimable(self, total_usd: Decimal) -> bool:
        """Check whether weekly activity reaches the threshold."""
        return total_usd >= self.min_claimable_usd

    def base_fragments(self, total_usd: Decimal) -> int:
        """
        Fragments for a week's activity without streak bonus.

        Formula: floor(total_usd)
        """
        if total_usd <= 0:
            return 0
        return int(total_usd.to_integral_value(rounding=ROUND_FLOOR))

    def apply_streak_bonus(
        self, base: int, previous_weeks: list[int] | None
    ) -> int:
        """
        Apply the consecutive-weeks streak bonus.

        With claims in both of the two previous weeks the award becomes the
        sum of those two weeks' fragments, never less than ``base``.

        Args:
            base: Fragments for the current week
            previous_weeks: Fragments of week-1 and week-2, or None when
                the streak is broken

        Returns:
            Fragments to award

        Example:
            >>> FragmentCalculator().apply_streak_bonus(50, [100, 50])
            150
        """
        if not previous_weeks:
            return base
        return max(base, sum(previous_weeks))
