"""
Exception handling utilities.

Defines the API error hierarchy. Every error carries the HTTP status and the
``type`` string rendered in JSON error responses.
"""

from web3.exceptions import ContractLogicError, Web3Exception


class SecurityError(Exception):
    """Raised when a security-critical operation fails."""
    pass


class ApiError(Exception):
    """Base class for errors rendered as JSON API responses."""

    status_code = 500
    error_type = "server_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {
            "success": False,
            "error": self.message,
            "type": self.error_type,
        }


class ValidationError(ApiError):
    """Request data failed validation."""

    status_code = 400
    error_type = "validation_error"

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["field"] = self.field
        return data


class AuthorizationError(ApiError):
    """Missing or wrong API key."""

    status_code = 403
    error_type = "authorization_error"

    def __init__(self, message: str = "Unauthorized access") -> None:
        super().__init__(message)


class NotFoundError(ApiError):
    status_code = 404
    error_type = "not_found_error"

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message)


class RateLimitError(ApiError):
    status_code = 429
    error_type = "rate_limit_error"

    def __init__(
        self, message: str = "Too many requests. Please try again later."
    ) -> None:
        super().__init__(message)


class BlockchainError(ApiError):
    """Contract call or transaction failed."""

    status_code = 500
    error_type = "blockchain_error"

    def __init__(self, message: str, tx_hash: str | None = None) -> None:
        super().__init__(message)
        self.tx_hash = tx_hash


# Exceptions raised by the RPC/contract layer that are rendered as
# blockchain errors even when not wrapped in BlockchainError
BLOCKCHAIN_EXCEPTIONS = (
    Web3Exception,
    ContractLogicError,
)


def is_blockchain_exception(exc: BaseException) -> bool:
    """
    Check whether an unexpected exception came from the chain.

    Args:
        exc: Exception to check

    Returns:
        True for web3 exceptions and anything mentioning a revert
    """
    if isinstance(exc, BLOCKCHAIN_EXCEPTIONS):
        return True
    return "revert" in str(exc).lower()
