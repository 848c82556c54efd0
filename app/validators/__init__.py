"""
Validators package.

Provides validation functions for request data.
"""

from app.validators.unified import (
    parse_limit,
    require_wallet_address,
    validate_wallet_address,
)


__all__ = [
    "parse_limit",
    "require_wallet_address",
    "validate_wallet_address",
]
