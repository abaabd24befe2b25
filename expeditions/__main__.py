"""
Expeditions API entry point.

Usage:
    python -m expeditions
"""

import asyncio

from aiohttp import web
from loguru import logger

from expeditions.api import create_app
from expeditions.config.settings import settings
from expeditions.database import create_engine, create_session_maker
from expeditions.logging_setup import setup_logging
from expeditions.services.subgraph import MultichainSubgraphService
from expeditions.services.tasks import FragmentCalculator


async def main() -> None:
    """Initialize and run the HTTP API."""
    setup_logging(settings.log_level, settings.log_file)

    engine = create_engine(settings.database_url, echo=settings.database_echo)
    subgraph = MultichainSubgraphService(
        settings.subgraph_urls, timeout=settings.subgraph_timeout_seconds
    )

    app = create_app(
        create_session_maker(engine),
        subgraph,
        calculator=FragmentCalculator(settings.min_claimable_usd),
        daily_visit_message=settings.daily_visit_message,
    )

    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, settings.api_host, settings.api_port)
    await site.start()

    logger.info(f"Expeditions API listening on {settings.api_host}:{settings.api_port}")
    logger.info(f"Subgraphs: {', '.join(settings.subgraph_urls) or 'none'}")

    try:
        await asyncio.Event().wait()
    finally:
        logger.info("Shutting down...")
        await runner.cleanup()
        await subgraph.close()
        await engine.dispose()
        logger.info("Expeditions API stopped")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
