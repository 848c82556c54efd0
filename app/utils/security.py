"""
Security utilities for masking sensitive data in logs.

Provides functions to safely mask sensitive information like:
- Wallet addresses
- Transaction hashes
- Private keys and API keys
- Request bodies written to the request log
"""

from typing import Any

from app.config.constants import REDACTED_VALUE, SENSITIVE_FIELDS


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


def mask_tx_hash(tx_hash: str | None) -> str:
    """
    Mask transaction hash for logging.

    Examples:
        >>> mask_tx_hash("0x1234567890abcdef1234567890abcdef1234567890abcdef1234567890abcdef")
        '0x12345678...abcdef'
    """
    if not tx_hash or len(tx_hash) < 16:
        return "***"
    return f"{tx_hash[:10]}...{tx_hash[-6:]}"


def mask_sensitive(value: str | None, show_chars: int = 4) -> str:
    """
    Mask sensitive string (keys, passwords, etc).

    Examples:
        >>> mask_sensitive("my_secret_key_1234567890", show_chars=4)
        'my_s...7890'
        >>> mask_sensitive("short")
        '***'
    """
    if not value or len(value) <= show_chars * 2:
        return "***"
    return f"{value[:show_chars]}...{value[-show_chars:]}"


def mask_private_key(key: str | None) -> str:
    """
    Completely mask private key - never show any part.

    Note:
        Private keys should NEVER appear in logs, even partially.
    """
    return "***MASKED***" if key else "***"


def sanitize_body(body: Any) -> Any:
    """
    Redact sensitive top-level fields of a JSON body before it is logged.

    Non-dict bodies are returned unchanged. The input is never mutated.

    Examples:
        >>> sanitize_body({"address": "0xabc", "privateKey": "0xdead"})
        {'address': '0xabc', 'privateKey': '***REDACTED***'}
    """
    if not isinstance(body, dict):
        return body

    sanitized = dict(body)
    for field in SENSITIVE_FIELDS:
        if sanitized.get(field):
            sanitized[field] = REDACTED_VALUE
    return sanitized
