"""Unified validators for request data."""

import re

from app.config.constants import DEFAULT_LOG_QUERY_LIMIT
from app.utils.exceptions import ValidationError


ADDRESS_RE = re.compile(r"0x[a-fA-F0-9]{40}")


def validate_wallet_address(address: object) -> tuple[bool, str | None]:
    """
    Check a wallet address without raising.

    Args:
        address: Wallet address to validate

    Returns:
        Tuple of (is_valid, error_message)

    Examples:
        >>> validate_wallet_address("0x1234567890123456789012345678901234567890")
        (True, None)
        >>> validate_wallet_address("invalid")
        (False, 'Address must start with 0x')
    """
    if not address:
        return False, "Address is empty"

    if not isinstance(address, str):
        return False, "Address must be a string"

    if not address.startswith("0x"):
        return False, "Address must start with 0x"

    if len(address) != 42:
        return False, "Address must be 42 characters"

    if not ADDRESS_RE.fullmatch(address):
        return False, "Invalid address format"

    return True, None


def require_wallet_address(address: object, field_name: str = "address") -> str:
    """
    Validate an address and return it lower-cased.

    Raises:
        ValidationError: When missing, not a string or badly formatted
    """
    if not address:
        raise ValidationError(f"{field_name} is required", field_name)

    if not isinstance(address, str):
        raise ValidationError(f"{field_name} must be a string", field_name)

    if not ADDRESS_RE.fullmatch(address):
        raise ValidationError(f"Invalid {field_name} format", field_name)

    return address.lower()


def parse_limit(raw: str | None, default: int = DEFAULT_LOG_QUERY_LIMIT) -> int:
    """Parse a ``limit`` query value; anything not a positive int gives the default."""
    try:
        value = int(raw) if raw is not None else default
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default
