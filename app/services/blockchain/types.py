"""
Typed views of contract return values.

Contract calls return positional tuples; these dataclasses name the fields
and provide the JSON shapes used by the API.
"""

from dataclasses import dataclass
from decimal import ROUND_DOWN, Decimal
from typing import Any

from app.config.constants import USDT_DECIMALS


def format_amount(amount_wei: int, decimals: int = USDT_DECIMALS) -> str:
    """
    Format an integer token amount as a decimal string.

    Examples:
        >>> format_amount(1500000000000000000)
        '1.5'
        >>> format_amount(0)
        '0.0'
    """
    value = Decimal(amount_wei) / Decimal(10 ** decimals)
    text = format(value.normalize(), "f")
    if "." not in text:
        text += ".0"
    return text


def parse_amount(amount: str | int | Decimal, decimals: int = USDT_DECIMALS) -> int:
    """Convert a human token amount into integer base units (rounded down)."""
    return int(
        (Decimal(str(amount)) * Decimal(10 ** decimals)).to_integral_value(ROUND_DOWN)
    )


def token_amount(amount_wei: int) -> dict[str, str]:
    """Amount in both raw and formatted form: {"wei": ..., "usdt": ...}."""
    return {"wei": str(amount_wei), "usdt": format_amount(amount_wei)}


@dataclass(frozen=True)
class UserInfo:
    """Decoded getUserInfo(address) result."""

    user_id: int
    sponsor_id: int
    direct_referrals: int
    total_earned: int
    total_withdrawn: int
    is_active: bool
    activation_timestamp: int
    non_working_claimed: int
    achiever_level: int
    user_name: str
    contact_number: str

    @classmethod
    def from_tuple(cls, raw: Any) -> "UserInfo":
        values = list(raw)
        return cls(
            user_id=int(values[0]),
            sponsor_id=int(values[1]),
            direct_referrals=int(values[2]),
            total_earned=int(values[3]),
            total_withdrawn=int(values[4]),
            is_active=bool(values[5]),
            activation_timestamp=int(values[6]),
            non_working_claimed=int(values[7]),
            achiever_level=int(values[8]),
            user_name=values[9] or "",
            contact_number=values[10] if len(values) > 10 and values[10] else "",
        )

    @property
    def is_registered(self) -> bool:
        return self.user_id != 0

    @property
    def is_activated(self) -> bool:
        return self.is_active and self.activation_timestamp > 0

    @property
    def has_profile(self) -> bool:
        return bool(self.user_name) and bool(self.contact_number)


@dataclass(frozen=True)
class GlobalPoolStats:
    """Decoded getGlobalPoolStats() result."""

    total_allocated: int
    total_claimed: int
    total_pending: int
    eligible_count: int

    @classmethod
    def from_tuple(cls, raw: Any) -> "GlobalPoolStats":
        allocated, claimed, pending, eligible = (int(v) for v in raw)
        return cls(allocated, claimed, pending, eligible)


@dataclass(frozen=True)
class ContractStats:
    """Decoded getContractStats() result."""

    total_users: int
    total_activated_users: int
    global_pool_balance: int
    total_distributed: int

    @classmethod
    def from_tuple(cls, raw: Any) -> "ContractStats":
        total, activated, balance, distributed = (int(v) for v in raw)
        return cls(total, activated, balance, distributed)


@dataclass(frozen=True)
class TransactionResult:
    """Mined transaction summary."""

    tx_hash: str
    block_number: int
    gas_used: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "hash": self.tx_hash,
            "blockNumber": self.block_number,
            "gasUsed": str(self.gas_used),
        }


@dataclass
class ConnectionReport:
    """Outcome of a blockchain connectivity check."""

    success: bool
    network: str | None = None
    chain_id: str | None = None
    manager_address: str | None = None
    manager_balance: str | None = None
    total_users: str | None = None
    is_manager: bool = False
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        if not self.success:
            return {"success": False, "error": self.error}
        return {
            "success": True,
            "network": self.network,
            "chainId": self.chain_id,
            "managerAddress": self.manager_address,
            "managerBalance": self.manager_balance,
            "totalUsers": self.total_users,
            "isManager": self.is_manager,
        }
