"""GraphQL queries against the DEX subgraphs."""

LIQUIDITY_POSITION_DEPOSITS_QUERY = """
query LiquidityPositionDeposits(
  $address: Bytes!
  $timestampA: BigInt!
  $timestampB: BigInt!
  $first: Int!
  $skip: Int!
) {
  mints(
    where: { to: $address, timestamp_gte: $timestampA, timestamp_lt: $timestampB }
    orderBy: timestamp
    orderDirection: asc
    first: $first
    skip: $skip
  ) {
    amountUSD
  }
}
"""

LIQUIDITY_STAKING_POSITIONS_QUERY = """
query LiquidityStakingPositions(
  $address: Bytes!
  $timestampA: BigInt!
  $timestampB: BigInt!
  $first: Int!
  $skip: Int!
) {
  deposits(
    where: { user: $address, timestamp_gte: $timestampA, timestamp_lt: $timestampB }
    orderBy: timestamp
    orderDirection: asc
    first: $first
    skip: $skip
  ) {
    amount
    liquidityMiningCampaign {
      stakablePair {
        totalSupply
        reserveUSD
      }
    }
  }
}
"""
