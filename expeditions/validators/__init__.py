"""Input validators."""

from expeditions.validators.unified import (
    normalize_wallet_address,
    validate_wallet_address,
)

__all__ = [
    "validate_wallet_address",
    "normalize_wallet_address",
]
