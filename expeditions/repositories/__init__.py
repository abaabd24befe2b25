"""Data access layer."""

from expeditions.repositories.campaign_repository import CampaignRepository
from expeditions.repositories.visit_repository import VisitRepository
from expeditions.repositories.weekly_fragment_repository import (
    WeeklyFragmentRepository,
)

__all__ = [
    "CampaignRepository",
    "VisitRepository",
    "WeeklyFragmentRepository",
]
