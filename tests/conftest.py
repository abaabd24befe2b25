"""Pytest configuration and shared fixtures for all tests."""

import os
from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

# Minimal environment so that settings can be imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_FILE", "")

import pytest
import pytest_asyncio
from eth_account import Account
from eth_account.signers.local import LocalAccount
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from expeditions.database import create_session_maker
from expeditions.models import Base, Campaign
from tests.factories import add_campaign


@pytest.fixture
def wallet() -> LocalAccount:
    """Random test wallet."""
    return Account.create()


@pytest.fixture
def now() -> datetime:
    """Fixed claim instant: Wednesday of ISO week 2026-W25."""
    return datetime(2026, 6, 17, 12, 0, tzinfo=UTC)


@pytest_asyncio.fixture
async def engine():
    """In-memory SQLite engine with all tables."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    """Session maker bound to the test engine."""
    return create_session_maker(engine)


@pytest_asyncio.fixture
async def session(session_maker):
    """Database session."""
    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def campaign(session, now) -> Campaign:
    """Campaign running from three weeks before to two weeks after ``now``."""
    return await add_campaign(
        session, now - timedelta(weeks=3), now + timedelta(weeks=2)
    )


@pytest.fixture
def position_reader() -> AsyncMock:
    """Position reader stub without any positions."""
    reader = AsyncMock()
    reader.get_liquidity_position_deposits_between = AsyncMock(return_value=[])
    reader.get_liquidity_staking_positions_between = AsyncMock(return_value=[])
    return reader
