"""
Enumerations shared by models, services and the HTTP layer.
"""

from enum import StrEnum


class TaskType(StrEnum):
    """Rewardable task categories.

    The value doubles as the message a wallet signs to claim the task.
    """

    VISIT = "VISIT"
    LIQUIDITY_PROVISION = "LIQUIDITY_PROVISION"
    LIQUIDITY_STAKING = "LIQUIDITY_STAKING"

    @property
    def is_weekly(self) -> bool:
        """Whether the task is bucketed into weekly fragments."""
        return self in WEEKLY_TASK_TYPES


WEEKLY_TASK_TYPES = (
    TaskType.LIQUIDITY_PROVISION,
    TaskType.LIQUIDITY_STAKING,
)
