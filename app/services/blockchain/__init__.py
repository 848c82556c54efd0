"""
Blockchain services module.

Provides access to the USDT Rain contract through ContractGateway, with
provider failover, manager wallet handling and typed return values.
"""

from .contract_gateway import ContractGateway
from .core_constants import USDT_RAIN_ABI
from .singleton import get_contract_gateway, init_contract_gateway
from .types import (
    ConnectionReport,
    ContractStats,
    GlobalPoolStats,
    TransactionResult,
    UserInfo,
    format_amount,
    parse_amount,
    token_amount,
)


__all__ = [
    "ContractGateway",
    "get_contract_gateway",
    "init_contract_gateway",
    "USDT_RAIN_ABI",
    "ConnectionReport",
    "ContractStats",
    "GlobalPoolStats",
    "TransactionResult",
    "UserInfo",
    "format_amount",
    "parse_amount",
    "token_amount",
]
