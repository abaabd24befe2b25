"""Application state keys."""

from aiohttp import web
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from expeditions.services.subgraph.types import PositionReader
from expeditions.services.tasks.fragment_calculator import FragmentCalculator

SESSION_MAKER = web.AppKey("session_maker", async_sessionmaker[AsyncSession])
POSITION_READER = web.AppKey("position_reader", PositionReader)
FRAGMENT_CALCULATOR = web.AppKey("fragment_calculator", FragmentCalculator)
DAILY_VISIT_MESSAGE = web.AppKey("daily_visit_message", str)
