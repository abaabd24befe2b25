"""
Security utilities for masking sensitive data in logs.
"""


def mask_address(address: str | None) -> str:
    """
    Mask wallet address for logging: 0x1234...5678

    Args:
        address: Wallet address to mask

    Returns:
        Masked address showing first 6 and last 4 characters

    Examples:
        >>> mask_address("0x1234567890abcdef1234567890abcdef12345678")
        '0x1234...5678'
        >>> mask_address(None)
        '***'
        >>> mask_address("short")
        '***'
    """
    if not address or len(address) < 10:
        return "***"
    return f"{address[:6]}...{address[-4:]}"


def mask_signature(signature: str | None) -> str:
    """
    Mask a hex signature for logging.

    Examples:
        >>> mask_signature("0x" + "ab" * 65)
        '0xababab...abab'
    """
    if not signature or len(signature) < 16:
        return "***"
    return f"{signature[:8]}...{signature[-4:]}"
