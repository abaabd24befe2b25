"""
Position reader contract.

The claim engine only depends on this protocol, so any object with these
two coroutines (a subgraph client, a stub in tests) can be injected.
"""

from typing import Any, Protocol, TypedDict


class LiquidityPositionDeposit(TypedDict):
    """Liquidity added to a pair (subgraph ``Mint``)."""

    amountUSD: str


class StakablePair(TypedDict):
    """Pair staked in a liquidity mining campaign."""

    totalSupply: str
    reserveUSD: str | float


class LiquidityMiningCampaign(TypedDict):
    """Liquidity mining campaign of a staking deposit."""

    stakablePair: StakablePair


class LiquidityStakingDeposit(TypedDict):
    """LP tokens staked in a liquidity mining campaign (subgraph ``Deposit``)."""

    amount: str
    liquidityMiningCampaign: LiquidityMiningCampaign


class PositionReader(Protocol):
    """Source of a wallet's weekly liquidity positions."""

    async def get_liquidity_position_deposits_between(
        self, address: str, timestamp_a: int, timestamp_b: int
    ) -> list[dict[str, Any]]:
        """Liquidity deposits of ``address`` in [timestamp_a, timestamp_b)."""
        ...

    async def get_liquidity_staking_positions_between(
        self, address: str, timestamp_a: int, timestamp_b: int
    ) -> list[dict[str, Any]]:
        """Staking deposits of ``address`` in [timestamp_a, timestamp_b)."""
        ...
