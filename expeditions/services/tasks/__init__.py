"""
Tasks services package.

This package provides the fragment-claiming functionality:
- fragment_calculator: Pure USD valuation and fragment formulas
- claim_engine: Idempotent, week-bucketed claim persistence
- tasks_service: Signed request handling and task state queries
"""

from expeditions.services.tasks.claim_engine import ClaimEngine
from expeditions.services.tasks.fragment_calculator import FragmentCalculator
from expeditions.services.tasks.tasks_service import TasksService
from expeditions.services.tasks.types import ClaimResult, WeeklyFragmentsSummary

__all__ = [
    "ClaimEngine",
    "ClaimResult",
    "FragmentCalculator",
    "TasksService",
    "WeeklyFragmentsSummary",
]
