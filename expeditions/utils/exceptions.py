"""
Exception types.

Every claim failure is an ``ExpeditionsError`` carrying a stable message,
the HTTP status it maps to and whether the caller may retry.
"""

from http import HTTPStatus


class ExpeditionsError(Exception):
    """Base class for expected service failures."""

    status_code: int = HTTPStatus.BAD_REQUEST
    retryable: bool = False
    default_message: str = "Bad request"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidSignature(ExpeditionsError):
    """Raised when a signature cannot be attributed to the claimed address."""

    default_message = "Invalid signature"


class NoActiveCampaign(ExpeditionsError):
    """Raised when no campaign covers the current instant."""

    default_message = "No active campaign has been found"


class AlreadyClaimed(ExpeditionsError):
    """Raised when the weekly bucket has already been claimed."""

    default_message = "Fragments already claimed"

    @classmethod
    def for_week(cls, task_type: str, week_date: str) -> "AlreadyClaimed":
        """Build the error for a weekly task bucket."""
        return cls(f"Weekly fragment for {task_type} for {week_date} already claimed")


class NoClaimableFragments(ExpeditionsError):
    """Raised when weekly activity is below the claim threshold."""

    default_message = "No claimable fragments"


class ExternalSourceUnavailable(ExpeditionsError):
    """Raised when a subgraph cannot be queried. Safe to retry."""

    status_code = HTTPStatus.SERVICE_UNAVAILABLE
    retryable = True
    default_message = "External data source is unavailable"


class DocumentNotFound(ExpeditionsError):
    """Raised when a record that must exist is missing."""

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR
    default_message = "Document not found"
