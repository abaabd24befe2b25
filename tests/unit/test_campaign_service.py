"""Tests for active campaign resolution."""

from datetime import timedelta

import pytest

from expeditions.services.campaign_service import CampaignService
from expeditions.utils.exceptions import DocumentNotFound, NoActiveCampaign
from tests.factories import add_campaign


@pytest.mark.asyncio
async def test_no_campaign(session, now):
    """Empty store has no active campaign."""
    service = CampaignService(session)

    with pytest.raises(NoActiveCampaign) as exc_info:
        await service.find_active_campaign(now)

    assert exc_info.value.message == "No active campaign has been found"


@pytest.mark.asyncio
async def test_finds_running_campaign(session, now, campaign):
    """Campaign containing now is active."""
    service = CampaignService(session)

    active = await service.find_active_campaign(now)

    assert active.id == campaign.id


@pytest.mark.asyncio
async def test_ended_and_future_campaigns_ignored(session, now):
    """Campaigns outside now are not active."""
    await add_campaign(session, now - timedelta(weeks=4), now - timedelta(days=1))
    await add_campaign(session, now + timedelta(days=1), now + timedelta(weeks=4))
    service = CampaignService(session)

    with pytest.raises(NoActiveCampaign):
        await service.find_active_campaign(now)


@pytest.mark.asyncio
async def test_boundaries_inclusive(session, now):
    """Start and end instants belong to the campaign."""
    starting = await add_campaign(session, now, now + timedelta(weeks=1))
    service = CampaignService(session)

    assert (await service.find_active_campaign(now)).id == starting.id
    assert (
        await service.find_active_campaign(now + timedelta(weeks=1))
    ).id == starting.id


@pytest.mark.asyncio
async def test_overlap_earliest_start_wins(session, now):
    """With overlapping campaigns the one started first is used."""
    later = await add_campaign(session, now - timedelta(days=1), now + timedelta(weeks=1))
    earlier = await add_campaign(session, now - timedelta(weeks=2), now + timedelta(weeks=1))
    service = CampaignService(session)

    active = await service.find_active_campaign(now)

    assert active.id == earlier.id
    assert active.id != later.id


@pytest.mark.asyncio
async def test_get_campaign_missing(session):
    """Unknown campaign id is an internal consistency fault."""
    service = CampaignService(session)

    with pytest.raises(DocumentNotFound):
        await service.get_campaign(404)


@pytest.mark.asyncio
async def test_get_campaign(session, campaign):
    """Known campaign is returned."""
    service = CampaignService(session)

    assert (await service.get_campaign(campaign.id)).id == campaign.id
