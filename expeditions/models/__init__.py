"""
Database models.

Exports all SQLAlchemy models for easy imports.
"""

from expeditions.models.base import Base
from expeditions.models.campaign import Campaign
from expeditions.models.enums import WEEKLY_TASK_TYPES, TaskType
from expeditions.models.visit import Visit
from expeditions.models.weekly_fragment import WeeklyFragment

__all__ = [
    # Base
    "Base",
    # Enums
    "TaskType",
    "WEEKLY_TASK_TYPES",
    # Models
    "Campaign",
    "Visit",
    "WeeklyFragment",
]
