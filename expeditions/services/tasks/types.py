"""Claim request and result types."""

from dataclasses import dataclass, field
from typing import Any

from expeditions.models.enums import WEEKLY_TASK_TYPES, TaskType


@dataclass(frozen=True)
class ClaimResult:
    """Outcome of a successful claim."""

    type: TaskType
    claimed_fragments: int

    def to_dict(self) -> dict[str, Any]:
        """JSON representation."""
        return {
            "type": self.type.value,
            "claimedFragments": self.claimed_fragments,
        }


@dataclass(frozen=True)
class WeeklyFragmentsSummary:
    """Weekly fragments of an address, per task type."""

    address: str
    week_date: str
    fragments: dict[TaskType, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        """Fragments across all weekly tasks."""
        return sum(self.fragments.values())

    def to_dict(self) -> dict[str, Any]:
        """JSON representation (unclaimed task types report 0)."""
        return {
            "address": self.address,
            "week": self.week_date,
            "fragments": {
                task_type.value: self.fragments.get(task_type, 0)
                for task_type in WEEKLY_TASK_TYPES
            },
            "totalFragments": self.total,
        }
