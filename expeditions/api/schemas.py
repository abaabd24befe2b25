"""
Request payload models.

Shape validation happens here, at the HTTP boundary; services receive
checksummed addresses and known task types only.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from expeditions.models.enums import TaskType
from expeditions.utils.week_utils import parse_week_date
from expeditions.validators.unified import normalize_wallet_address

SIGNATURE_PATTERN = r"^0x[0-9a-fA-F]{130}$"


class AddressQuery(BaseModel):
    """``?address=`` query of state endpoints."""

    model_config = ConfigDict(extra="ignore")

    address: str

    @field_validator("address")
    @classmethod
    def validate_address(cls, v: str) -> str:
        """Checksum the wallet address."""
        return normalize_wallet_address(v)


class WeeklyFragmentsQuery(AddressQuery):
    """``?address=&week=`` query of the weekly fragments endpoint."""

    week: str | None = None

    @field_validator("week")
    @classmethod
    def validate_week(cls, v: str | None) -> str | None:
        """Week must be a ``YYYY-Www`` label."""
        if v is None:
            return v
        return parse_week_date(v).week_date


class SignaturePayload(BaseModel):
    """Payload carrying only a signature."""

    model_config = ConfigDict(extra="forbid")

    signature: str = Field(pattern=SIGNATURE_PATTERN)


class DailyVisitPayload(SignaturePayload):
    """
    Payload of the daily-visit endpoints.

    ``address`` is optional; when sent, the signer must match it.
    """

    address: str | None = None

    @field_validator("address")
    @classmethod
    def validate_address(cls, v: str | None) -> str | None:
        """Checksum the wallet address."""
        if v is None:
            return v
        return normalize_wallet_address(v)


class AddressWithSignaturePayload(SignaturePayload):
    """Payload of per-task claim endpoints."""

    address: str

    @field_validator("address")
    @classmethod
    def validate_address(cls, v: str) -> str:
        """Checksum the wallet address."""
        return normalize_wallet_address(v)


class ClaimPayload(AddressWithSignaturePayload):
    """Payload of the generic claim endpoint."""

    type: TaskType
