"""
HTTP application factory.
"""

from aiohttp import web
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from expeditions.api import handlers, keys
from expeditions.api.errors import error_middleware
from expeditions.api.health import health_handler, liveness_handler
from expeditions.config.constants import DAILY_VISIT_MESSAGE
from expeditions.services.subgraph.types import PositionReader
from expeditions.services.tasks.fragment_calculator import FragmentCalculator


def register_routes(app: web.Application) -> None:
    """Register all routes."""
    router = app.router

    router.add_route("*", "/", handlers.root_handler)
    router.add_get("/health", health_handler)
    router.add_get("/liveness", liveness_handler)

    # Daily visits
    router.add_get("/expeditions", handlers.get_daily_visits)
    router.add_get("/expeditions/daily-visits", handlers.get_daily_visits)
    router.add_post("/expeditions/daily-visit", handlers.claim_daily_visit)
    router.add_post("/expeditions/daily-visits", handlers.claim_daily_visit)

    # Generic claim
    router.add_post("/expeditions/claim", handlers.claim)

    # Weekly fragments
    router.add_get("/expeditions/weekly-fragments", handlers.get_weekly_fragments)
    router.add_post(
        "/expeditions/weekly-fragments/liquidity-provision/claim",
        handlers.claim_liquidity_provision,
    )
    router.add_post(
        "/expeditions/weekly-fragments/liquidity-staking/claim",
        handlers.claim_liquidity_staking,
    )


def create_app(
    session_maker: async_sessionmaker[AsyncSession],
    position_reader: PositionReader,
    calculator: FragmentCalculator | None = None,
    daily_visit_message: str = DAILY_VISIT_MESSAGE,
) -> web.Application:
    """
    Create the HTTP application.

    Args:
        session_maker: Factory of per-request sessions
        position_reader: Source of weekly liquidity positions
        calculator: Fragment calculator
        daily_visit_message: Message signed on the daily-visit endpoint

    Returns:
        Configured application
    """
    app = web.Application(middlewares=[error_middleware])
    app[keys.SESSION_MAKER] = session_maker
    app[keys.POSITION_READER] = position_reader
    app[keys.FRAGMENT_CALCULATOR] = calculator or FragmentCalculator()
    app[keys.DAILY_VISIT_MESSAGE] = daily_visit_message

    register_routes(app)
    return app
