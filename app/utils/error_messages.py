"""
Map raw node, wallet and contract errors to user-friendly messages.

Two levels are provided:
- parse_blockchain_error: one-line message used in API error responses
- describe_error: title/message/action/retryable details for clients
"""

from dataclasses import asdict, dataclass
from typing import Any


GENERIC_BLOCKCHAIN_MESSAGE = (
    "Transaction failed. Please try again or contact support."
)

# Checked in order, case-insensitive substring match
BLOCKCHAIN_ERROR_PATTERNS: tuple[tuple[str, str], ...] = (
    ("insufficient funds", "Insufficient funds for transaction"),
    ("gas required exceeds allowance", "Transaction requires more gas"),
    ("execution reverted", "Transaction rejected by contract"),
    ("nonce too low", "Transaction nonce too low, please retry"),
    ("only manager", "Only authorized managers can perform this action"),
    ("user not found", "User not found in the system"),
    ("already eligible", "User is already in the eligible list"),
    ("not eligible", "User is not in the eligible list"),
    ("insufficient referrals", "User does not have enough referrals"),
    ("invalid address", "Invalid wallet address provided"),
)


@dataclass(frozen=True)
class ErrorDetails:
    """User-facing description of an error."""

    title: str
    message: str
    retryable: bool
    action: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def error_text(error: Any) -> str:
    """
    Extract the most descriptive text from an exception.

    web3 RPC errors often carry a dict payload as the first argument.
    """
    if error is None:
        return ""
    args = getattr(error, "args", ())
    if args and isinstance(args[0], dict):
        payload = args[0]
        return str(payload.get("message") or payload)
    for attr in ("message", "reason"):
        value = getattr(error, attr, None)
        if isinstance(value, str) and value:
            return value
    return str(error)


def error_code(error: Any) -> int | str | None:
    """Return an RPC/wallet error code if the exception carries one."""
    code = getattr(error, "code", None)
    if code is not None:
        return code
    args = getattr(error, "args", ())
    if args and isinstance(args[0], dict):
        return args[0].get("code")
    return None


def parse_blockchain_error(error: Any) -> str:
    """
    Convert a blockchain error into a short friendly message.

    Args:
        error: Exception (or message) raised by the RPC/contract layer

    Returns:
        Friendly message, or a generic fallback when nothing matches
    """
    text = error_text(error).lower()
    for pattern, friendly in BLOCKCHAIN_ERROR_PATTERNS:
        if pattern in text:
            return friendly
    return GENERIC_BLOCKCHAIN_MESSAGE


_CODE_DETAILS: dict[int | str, ErrorDetails] = {
    4001: ErrorDetails(
        "Transaction Rejected",
        "The transaction was rejected by the signer.",
        retryable=True,
    ),
    -32002: ErrorDetails(
        "Pending Request",
        "A request is already pending for this account.",
        retryable=False,
    ),
    -32603: ErrorDetails(
        "Internal Error",
        "An internal error occurred. Please try again.",
        retryable=True,
    ),
    "NETWORK_ERROR": ErrorDetails(
        "Network Error",
        "Unable to connect to the blockchain. Please check your internet connection.",
        retryable=True,
        action="Check your connection and try again",
    ),
    "INSUFFICIENT_FUNDS": ErrorDetails(
        "Insufficient Funds",
        "The wallet does not have enough native balance to pay for gas fees.",
        retryable=False,
        action="Top up the manager wallet",
    ),
    "UNPREDICTABLE_GAS_LIMIT": ErrorDetails(
        "Transaction Will Fail",
        "This transaction is likely to fail. Please check the requirements.",
        retryable=False,
    ),
}

# (needles, case_sensitive, details); first match wins
_MESSAGE_DETAILS: tuple[tuple[tuple[str, ...], bool, ErrorDetails], ...] = (
    (
        ("0x118cdaa7", "ownableunauthorizedaccount"),
        False,
        ErrorDetails(
            "Unauthorized",
            "Only the contract owner can perform this action.",
            retryable=False,
            action="Use the owner wallet or contact the administrator.",
        ),
    ),
    (
        ("0xd93c0665", "enforcedpause"),
        False,
        ErrorDetails(
            "Contract Paused",
            "The contract is currently paused.",
            retryable=False,
            action="Wait for the contract to be unpaused or contact support.",
        ),
    ),
    (
        ("0x8dfc202b", "expectedpause"),
        False,
        ErrorDetails(
            "Contract Not Paused",
            "This action requires the contract to be paused first.",
            retryable=False,
            action="Pause the contract before performing this action.",
        ),
    ),
    (
        ("0xab143c06", "reentrancyguard"),
        False,
        ErrorDetails(
            "Transaction In Progress",
            "Another transaction is currently being processed.",
            retryable=True,
            action="Wait for the current transaction to complete.",
        ),
    ),
    (
        ("User not registered",),
        True,
        ErrorDetails(
            "Not Registered",
            "The user needs to register before performing this action.",
            retryable=False,
            action="Go to registration",
        ),
    ),
    (
        ("User not activated",),
        True,
        ErrorDetails(
            "Account Not Activated",
            "The account needs to be activated first.",
            retryable=False,
            action="Activate your account",
        ),
    ),
    (
        ("Insufficient balance", "insufficient funds"),
        True,
        ErrorDetails(
            "Insufficient Balance",
            "The wallet does not have enough funds for this transaction.",
            retryable=False,
        ),
    ),
    (
        ("No earnings to withdraw",),
        True,
        ErrorDetails(
            "No Earnings Available",
            "There are no earnings to withdraw at this time.",
            retryable=False,
        ),
    ),
    (
        ("Invalid sponsor",),
        True,
        ErrorDetails(
            "Invalid Sponsor",
            "The sponsor ID does not exist or is invalid.",
            retryable=True,
            action="Check the sponsor ID",
        ),
    ),
    (
        ("Already registered",),
        True,
        ErrorDetails(
            "Already Registered",
            "This wallet address is already registered.",
            retryable=False,
        ),
    ),
    (
        ("Invalid level",),
        True,
        ErrorDetails(
            "Invalid Level",
            "The level you specified is invalid.",
            retryable=False,
        ),
    ),
    (
        ("Username too short", "Username too long"),
        True,
        ErrorDetails(
            "Invalid Username",
            "Username must be between 3 and 50 characters.",
            retryable=True,
        ),
    ),
    (
        ("Invalid contact number",),
        True,
        ErrorDetails(
            "Invalid Contact Number",
            "Please enter a valid contact number.",
            retryable=True,
        ),
    ),
    (
        ("timeout", "timed out"),
        False,
        ErrorDetails(
            "Request Timeout",
            "The request took too long. Please try again.",
            retryable=True,
        ),
    ),
    (
        ("rate limit", "too many requests"),
        False,
        ErrorDetails(
            "Too Many Requests",
            "Too many requests to the network. Please wait a moment and try again.",
            retryable=True,
        ),
    ),
    (
        ("gas required exceeds allowance",),
        False,
        ErrorDetails(
            "Insufficient Gas",
            "The wallet does not have enough native balance for this transaction.",
            retryable=False,
            action="Top up the manager wallet",
        ),
    ),
    (
        ("nonce",),
        False,
        ErrorDetails(
            "Transaction Conflict",
            "There is a transaction conflict. Please try again.",
            retryable=True,
        ),
    ),
)


def describe_error(error: Any) -> ErrorDetails:
    """
    Describe an error for API clients.

    Args:
        error: Exception raised anywhere in the request path

    Returns:
        ErrorDetails with title, message, optional action and retry hint
    """
    if error is None:
        return ErrorDetails(
            "Unknown Error",
            "An unexpected error occurred. Please try again.",
            retryable=True,
        )

    code = error_code(error)
    if code is not None and code in _CODE_DETAILS:
        return _CODE_DETAILS[code]

    text = error_text(error)
    lowered = text.lower()
    for needles, case_sensitive, details in _MESSAGE_DETAILS:
        haystack = text if case_sensitive else lowered
        if any(
            (needle if case_sensitive else needle.lower()) in haystack
            for needle in needles
        ):
            return details

    return ErrorDetails(
        "Transaction Failed",
        text
        if text and len(text) <= 100
        else "An unexpected error occurred. Please try again.",
        retryable=True,
    )


def is_retryable_error(error: Any) -> bool:
    return describe_error(error).retryable
