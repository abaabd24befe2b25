"""
External position reader.

Reads liquidity-provision and liquidity-staking positions of a wallet from
the DEX subgraphs.
"""

from expeditions.services.subgraph.multichain_subgraph_service import (
    MultichainSubgraphService,
)
from expeditions.services.subgraph.types import (
    LiquidityPositionDeposit,
    LiquidityStakingDeposit,
    PositionReader,
)

__all__ = [
    "PositionReader",
    "LiquidityPositionDeposit",
    "LiquidityStakingDeposit",
    "MultichainSubgraphService",
]
