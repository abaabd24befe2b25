"""Unified validators for the whole project."""

from loguru import logger
from web3 import Web3


def validate_wallet_address(address: str) -> tuple[bool, str | None]:
    """
    Single wallet address validator.

    Args:
        address: Wallet address to validate

    Returns:
        Tuple of (is_valid, error_message)
        - (True, None) if valid
        - (False, error_message) if invalid

    Examples:
        >>> validate_wallet_address("0x1234567890123456789012345678901234567890")
        (True, None)
        >>> validate_wallet_address("invalid")
        (False, 'Address must start with 0x')
    """
    if not address or not isinstance(address, str):
        return False, "Address is empty"

    address = address.strip()

    if not address:
        return False, "Address is empty"

    if not address.startswith("0x"):
        return False, "Address must start with 0x"

    if len(address) != 42:
        return False, "Address must be 42 characters"

    try:
        int(address[2:], 16)
    except ValueError:
        return False, "Invalid address format"

    # Mixed-case addresses must carry a valid EIP-55 checksum
    body = address[2:]
    if body != body.lower() and body != body.upper():
        if not Web3.is_checksum_address(address):
            return False, "Invalid address checksum"

    try:
        Web3.to_checksum_address(address)
        return True, None
    except (ValueError, TypeError) as e:
        logger.debug(f"Address validation failed for {address}: {e}")
        return False, "Invalid address format"


def normalize_wallet_address(address: str) -> str:
    """
    Normalize wallet address to its EIP-55 checksum form.

    Args:
        address: Wallet address

    Returns:
        Checksummed address

    Raises:
        ValueError: If address is invalid
    """
    is_valid, error = validate_wallet_address(address)
    if not is_valid:
        raise ValueError(error)
    return Web3.to_checksum_address(address.strip())
