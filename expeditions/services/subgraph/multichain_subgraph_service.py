"""
Multichain subgraph service.

Queries every configured DEX subgraph (one per chain) for a wallet's
liquidity positions and merges the results. There is no cache: every claim
reads fresh data.
"""

import asyncio
from typing import Any

import aiohttp
from loguru import logger

from expeditions.config.constants import SUBGRAPH_PAGE_SIZE, SUBGRAPH_TIMEOUT
from expeditions.services.subgraph.queries import (
    LIQUIDITY_POSITION_DEPOSITS_QUERY,
    LIQUIDITY_STAKING_POSITIONS_QUERY,
)
from expeditions.utils.exceptions import ExternalSourceUnavailable
from expeditions.utils.security import mask_address


class MultichainSubgraphService:
    """
    Position reader backed by The Graph endpoints.

    Any HTTP failure, GraphQL error or timeout raises
    ``ExternalSourceUnavailable`` so callers can retry later.
    """

    def __init__(
        self,
        subgraph_urls: dict[str, str],
        timeout: float = SUBGRAPH_TIMEOUT,
        page_size: int = SUBGRAPH_PAGE_SIZE,
    ) -> None:
        """
        Initialize subgraph service.

        Args:
            subgraph_urls: Chain name -> GraphQL endpoint
            timeout: Total timeout of one request in seconds
            page_size: Entities fetched per request
        """
        self.subgraph_urls = dict(subgraph_urls)
        self.timeout = timeout
        self.page_size = page_size
        self._session: aiohttp.ClientSession | None = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    async def _query(
        self, chain: str, url: str, query: str, variables: dict[str, Any]
    ) -> dict[str, Any]:
        """
        Execute one GraphQL request.

        Returns:
            The ``data`` object of the response
        """
        payload = {"query": query, "variables": variables}

        try:
            session = await self._get_session()
            async with session.post(
                url,
                json=payload,
                headers={"Content-Type": "application/json"},
            ) as response:
                if response.status != 200:
                    logger.warning(f"Subgraph {chain} error: HTTP {response.status}")
                    raise ExternalSourceUnavailable(
                        f"Subgraph {chain} responded with HTTP {response.status}"
                    )
                body = await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"Subgraph {chain} request failed: {e!r}")
            raise ExternalSourceUnavailable(f"Subgraph {chain} is unreachable") from e
        except ValueError as e:
            logger.warning(f"Subgraph {chain} returned invalid JSON: {e!r}")
            raise ExternalSourceUnavailable(
                f"Subgraph {chain} returned an invalid response"
            ) from e

        if not isinstance(body, dict):
            logger.warning(f"Subgraph {chain} returned {type(body).__name__} body")
            raise ExternalSourceUnavailable(
                f"Subgraph {chain} returned an invalid response"
            )

        if body.get("errors"):
            logger.warning(f"Subgraph {chain} GraphQL errors: {body['errors']}")
            raise ExternalSourceUnavailable(f"Subgraph {chain} returned errors")

        data = body.get("data") or {}
        if not isinstance(data, dict):
            raise ExternalSourceUnavailable(
                f"Subgraph {chain} returned an invalid response"
            )
        return data

    async def _fetch_chain(
        self,
        chain: str,
        url: str,
        query: str,
        entity: str,
        variables: dict[str, Any],
    ) -> list[dict[str, Any]]:
        """Fetch all pages of ``entity`` from one subgraph."""
        items: list[dict[str, Any]] = []
        skip = 0

        while True:
            data = await self._query(
                chain,
                url,
                query,
                {**variables, "first": self.page_size, "skip": skip},
            )
            page = data.get(entity) or []
            items.extend(page)
            if len(page) < self.page_size:
                break
            skip += self.page_size

        return items

    async def _fetch_all(
        self,
        query: str,
        entity: str,
        address: str,
        timestamp_a: int,
        timestamp_b: int,
    ) -> list[dict[str, Any]]:
        """Fetch ``entity`` from every configured chain concurrently."""
        variables = {
            # subgraph Bytes filters are lowercase hex
            "address": address.lower(),
            "timestampA": str(timestamp_a),
            "timestampB": str(timestamp_b),
        }

        tasks = [
            asyncio.create_task(
                self._fetch_chain(chain, url, query, entity, variables),
                name=f"subgraph-{chain}",
            )
            for chain, url in self.subgraph_urls.items()
        ]
        try:
            results = await asyncio.gather(*tasks)
        finally:
            # One failed chain fails the read; stop the others
            pending = [task for task in tasks if not task.done()]
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)

        items = [item for chain_items in results for item in chain_items]
        logger.debug(
            f"Fetched {len(items)} {entity} for {mask_address(address)} "
            f"from {len(self.subgraph_urls)} subgraph(s)"
        )
        return items

    async def get_liquidity_position_deposits_between(
        self, address: str, timestamp_a: int, timestamp_b: int
    ) -> list[dict[str, Any]]:
        """
        Get liquidity deposits of an address between two timestamps.

        Args:
            address: Wallet address
            timestamp_a: Range start (inclusive, unix seconds)
            timestamp_b: Range end (exclusive, unix seconds)

        Returns:
            List of ``{"amountUSD": str}``
        """
        return await self._fetch_all(
            LIQUIDITY_POSITION_DEPOSITS_QUERY,
            "mints",
            address,
            timestamp_a,
            timestamp_b,
        )

    async def get_liquidity_staking_positions_between(
        self, address: str, timestamp_a: int, timestamp_b: int
    ) -> list[dict[str, Any]]:
        """
        Get staking deposits of an address between two timestamps.

        Args:
            address: Wallet address
            timestamp_a: Range start (inclusive, unix seconds)
            timestamp_b: Range end (exclusive, unix seconds)

        Returns:
            List of deposits with ``amount`` and the staked pair's
            ``totalSupply`` / ``reserveUSD``
        """
        return await self._fetch_all(
            LIQUIDITY_STAKING_POSITIONS_QUERY,
            "deposits",
            address,
            timestamp_a,
            timestamp_b,
        )
