"""
Tests for the fragment claim engine.

Tests cover:
- Daily visit claims
- USD threshold
- One claim per weekly bucket, including concurrent claims
- Streak bonus across weeks and years
- Subgraph failures
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest
from sqlalchemy import select

from expeditions.models import TaskType, Visit, WeeklyFragment
from expeditions.repositories import WeeklyFragmentRepository
from expeditions.services.tasks.claim_engine import ClaimEngine
from expeditions.utils.exceptions import (
    AlreadyClaimed,
    ExternalSourceUnavailable,
    NoClaimableFragments,
)
from expeditions.utils.week_utils import get_week_information
from tests.factories import provision_positions, staking_positions

WEEKLY = [TaskType.LIQUIDITY_PROVISION, TaskType.LIQUIDITY_STAKING]


def _stub(reader: AsyncMock, task_type: TaskType, amounts: list[float]) -> None:
    if task_type == TaskType.LIQUIDITY_PROVISION:
        reader.get_liquidity_position_deposits_between.return_value = (
            provision_positions(amounts)
        )
    else:
        reader.get_liquidity_staking_positions_between.return_value = (
            staking_positions(amounts)
        )


async def _add_claim(session, address, campaign_id, task_type, week, fragments):
    session.add(
        WeeklyFragment(
            address=address,
            campaign_id=campaign_id,
            type=task_type.value,
            week=week.week_number,
            year=week.year,
            fragments=fragments,
        )
    )
    await session.commit()


async def _count_claims(session) -> int:
    return await WeeklyFragmentRepository(session).count()


@pytest.mark.asyncio
async def test_visit_claim(session, campaign, wallet, now, position_reader):
    """Daily visit claims no fragments and bumps the visit counter."""
    engine = ClaimEngine(session, position_reader)

    result = await engine.claim(wallet.address, campaign.id, TaskType.VISIT, now)

    assert result.to_dict() == {"type": "VISIT", "claimedFragments": 0}
    visit = await session.scalar(select(Visit).where(Visit.address == wallet.address))
    assert visit.all_visits == 1
    position_reader.get_liquidity_position_deposits_between.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize("task_type", WEEKLY)
async def test_below_threshold(session, campaign, wallet, now, position_reader, task_type):
    """10 + 20 USD is not enough."""
    _stub(position_reader, task_type, [10, 20])
    engine = ClaimEngine(session, position_reader)

    with pytest.raises(NoClaimableFragments) as exc_info:
        await engine.claim(wallet.address, campaign.id, task_type, now)

    assert exc_info.value.message == "No claimable fragments"
    assert await _count_claims(session) == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("task_type", WEEKLY)
async def test_exact_threshold(session, campaign, wallet, now, position_reader, task_type):
    """50 USD is claimable and worth 50 fragments."""
    _stub(position_reader, task_type, [20, 30])
    engine = ClaimEngine(session, position_reader)

    result = await engine.claim(wallet.address, campaign.id, task_type, now)

    assert result.type == task_type
    assert result.claimed_fragments == 50
    assert await _count_claims(session) == 1


@pytest.mark.asyncio
async def test_fractional_usd_floored(session, campaign, wallet, now, position_reader):
    """Fragments are whole USD."""
    position_reader.get_liquidity_position_deposits_between.return_value = (
        provision_positions([50.25, 10.5])
    )
    engine = ClaimEngine(session, position_reader)

    result = await engine.claim(
        wallet.address, campaign.id, TaskType.LIQUIDITY_PROVISION, now
    )

    assert result.claimed_fragments == 60


@pytest.mark.asyncio
@pytest.mark.parametrize("task_type", WEEKLY)
async def test_already_claimed(session, campaign, wallet, now, position_reader, task_type):
    """Second claim in the same week is rejected with the week label."""
    _stub(position_reader, task_type, [50])
    week = get_week_information(now)
    await _add_claim(session, wallet.address, campaign.id, task_type, week, 50)
    engine = ClaimEngine(session, position_reader)

    with pytest.raises(AlreadyClaimed) as exc_info:
        await engine.claim(wallet.address, campaign.id, task_type, now)

    assert exc_info.value.message == (
        f"Weekly fragment for {task_type.value} for 2026-W25 already claimed"
    )
    assert await _count_claims(session) == 1


@pytest.mark.asyncio
async def test_other_type_same_week_allowed(session, campaign, wallet, now, position_reader):
    """Buckets are per task type."""
    week = get_week_information(now)
    await _add_claim(
        session, wallet.address, campaign.id, TaskType.LIQUIDITY_STAKING, week, 70
    )
    _stub(position_reader, TaskType.LIQUIDITY_PROVISION, [50])
    engine = ClaimEngine(session, position_reader)

    result = await engine.claim(
        wallet.address, campaign.id, TaskType.LIQUIDITY_PROVISION, now
    )

    assert result.claimed_fragments == 50
    assert await _count_claims(session) == 2


@pytest.mark.asyncio
@pytest.mark.parametrize("task_type", WEEKLY)
async def test_streak_bonus(session, campaign, wallet, now, position_reader, task_type):
    """Claims in both previous weeks pay their sum."""
    _stub(position_reader, task_type, [50])
    week = get_week_information(now)
    await _add_claim(session, wallet.address, campaign.id, task_type, week.shift(-2), 50)
    await _add_claim(session, wallet.address, campaign.id, task_type, week.shift(-1), 100)
    engine = ClaimEngine(session, position_reader)

    result = await engine.claim(wallet.address, campaign.id, task_type, now)

    assert result.to_dict() == {"type": task_type.value, "claimedFragments": 150}
    stored = await session.scalar(
        select(WeeklyFragment).where(WeeklyFragment.week == week.week_number)
    )
    assert stored.fragments == 150


@pytest.mark.asyncio
async def test_streak_never_below_base(session, campaign, wallet, now, position_reader):
    """A big week is not reduced by a small streak."""
    _stub(position_reader, TaskType.LIQUIDITY_PROVISION, [500])
    week = get_week_information(now)
    for offset in (1, 2):
        await _add_claim(
            session,
            wallet.address,
            campaign.id,
            TaskType.LIQUIDITY_PROVISION,
            week.shift(-offset),
            50,
        )
    engine = ClaimEngine(session, position_reader)

    result = await engine.claim(
        wallet.address, campaign.id, TaskType.LIQUIDITY_PROVISION, now
    )

    assert result.claimed_fragments == 500


@pytest.mark.asyncio
async def test_broken_streak_pays_base(session, campaign, wallet, now, position_reader):
    """Only week-1 claimed: no bonus."""
    _stub(position_reader, TaskType.LIQUIDITY_PROVISION, [50])
    week = get_week_information(now)
    await _add_claim(
        session, wallet.address, campaign.id, TaskType.LIQUIDITY_PROVISION,
        week.shift(-1), 100,
    )
    engine = ClaimEngine(session, position_reader)

    result = await engine.claim(
        wallet.address, campaign.id, TaskType.LIQUIDITY_PROVISION, now
    )

    assert result.claimed_fragments == 50


@pytest.mark.asyncio
async def test_streak_of_other_type_ignored(session, campaign, wallet, now, position_reader):
    """Streaks are tracked per task type."""
    _stub(position_reader, TaskType.LIQUIDITY_PROVISION, [50])
    week = get_week_information(now)
    for offset in (1, 2):
        await _add_claim(
            session, wallet.address, campaign.id, TaskType.LIQUIDITY_STAKING,
            week.shift(-offset), 100,
        )
    engine = ClaimEngine(session, position_reader)

    result = await engine.claim(
        wallet.address, campaign.id, TaskType.LIQUIDITY_PROVISION, now
    )

    assert result.claimed_fragments == 50


@pytest.mark.asyncio
async def test_streak_across_new_year(session, campaign, wallet, position_reader):
    """2027-W01 continues the streak of 2026-W53 and 2026-W52."""
    claim_time = datetime(2027, 1, 6, 12, 0, tzinfo=UTC)
    week = get_week_information(claim_time)
    assert week.week_date == "2027-W01"
    _stub(position_reader, TaskType.LIQUIDITY_STAKING, [50])
    await _add_claim(
        session, wallet.address, campaign.id, TaskType.LIQUIDITY_STAKING,
        week.shift(-1), 60,
    )
    await _add_claim(
        session, wallet.address, campaign.id, TaskType.LIQUIDITY_STAKING,
        week.shift(-2), 40,
    )
    engine = ClaimEngine(session, position_reader)

    result = await engine.claim(
        wallet.address, campaign.id, TaskType.LIQUIDITY_STAKING, claim_time
    )

    assert result.claimed_fragments == 100


@pytest.mark.asyncio
async def test_concurrent_claim_loses(session, campaign, wallet, now, position_reader):
    """When another request commits first the insert is rejected."""
    _stub(position_reader, TaskType.LIQUIDITY_PROVISION, [80])
    week = get_week_information(now)
    await _add_claim(
        session, wallet.address, campaign.id, TaskType.LIQUIDITY_PROVISION, week, 80
    )
    engine = ClaimEngine(session, position_reader)
    # The pre-check ran before the competing request committed
    engine.repo.get_for_week = AsyncMock(return_value=None)

    with pytest.raises(AlreadyClaimed):
        await engine.claim(
            wallet.address, campaign.id, TaskType.LIQUIDITY_PROVISION, now
        )

    assert await _count_claims(session) == 1


@pytest.mark.asyncio
async def test_reader_failure_leaves_no_record(
    session, campaign, wallet, now, position_reader
):
    """Subgraph outage is reported and nothing is stored."""
    position_reader.get_liquidity_position_deposits_between.side_effect = (
        ExternalSourceUnavailable()
    )
    engine = ClaimEngine(session, position_reader)

    with pytest.raises(ExternalSourceUnavailable) as exc_info:
        await engine.claim(
            wallet.address, campaign.id, TaskType.LIQUIDITY_PROVISION, now
        )

    assert exc_info.value.retryable
    assert await _count_claims(session) == 0


@pytest.mark.asyncio
async def test_malformed_positions(session, campaign, wallet, now, position_reader):
    """Positions without the expected fields count as an unusable source."""
    position_reader.get_liquidity_staking_positions_between.return_value = [
        {"amount": "100"}
    ]
    engine = ClaimEngine(session, position_reader)

    with pytest.raises(ExternalSourceUnavailable):
        await engine.claim(
            wallet.address, campaign.id, TaskType.LIQUIDITY_STAKING, now
        )

    assert await _count_claims(session) == 0


@pytest.mark.asyncio
async def test_reader_called_with_week_bounds(
    session, campaign, wallet, now, position_reader
):
    """Positions are read from Monday 00:00 UTC to next Monday."""
    _stub(position_reader, TaskType.LIQUIDITY_PROVISION, [50])
    engine = ClaimEngine(session, position_reader)

    await engine.claim(wallet.address, campaign.id, TaskType.LIQUIDITY_PROVISION, now)

    position_reader.get_liquidity_position_deposits_between.assert_awaited_once_with(
        wallet.address,
        int(datetime(2026, 6, 15, tzinfo=UTC).timestamp()),
        int(datetime(2026, 6, 22, tzinfo=UTC).timestamp()),
    )
