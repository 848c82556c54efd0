"""Pytest configuration and shared fixtures for all tests."""

import os
import sys
from pathlib import Path

# Minimal environment so Settings() can load without a .env file
os.environ.setdefault("RPC_URL", "http://127.0.0.1:8545")
os.environ.setdefault(
    "MANAGER_PRIVATE_KEY",
    "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318",
)
os.environ.setdefault("CONTRACT_ADDRESS", "0x742d35Cc6634C0532925a3b844Bc9e7595f0bEb0")
os.environ.setdefault("ENVIRONMENT", "test")

# Add project root to PYTHONPATH
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402

from app.config.settings import Settings  # noqa: E402
from app.services.blockchain.types import (  # noqa: E402
    ConnectionReport,
    ContractStats,
    GlobalPoolStats,
    TransactionResult,
    UserInfo,
)


ONE_USDT = 10**18


def make_user_info(
    user_id: int = 7,
    direct_referrals: int = 12,
    is_active: bool = True,
    activation_timestamp: int = 1_700_000_000,
    user_name: str = "alice",
    contact_number: str = "+10000000000",
) -> UserInfo:
    """UserInfo with sensible defaults for an active, eligible-ready user."""
    return UserInfo(
        user_id=user_id,
        sponsor_id=1,
        direct_referrals=direct_referrals,
        total_earned=0,
        total_withdrawn=0,
        is_active=is_active,
        activation_timestamp=activation_timestamp,
        non_working_claimed=0,
        achiever_level=0,
        user_name=user_name,
        contact_number=contact_number,
    )


@pytest.fixture
def settings(tmp_path):
    """Settings isolated from any local .env file, logging into tmp_path."""
    return Settings(
        _env_file=None,
        rpc_url="http://127.0.0.1:8545",
        manager_private_key=os.environ["MANAGER_PRIVATE_KEY"],
        contract_address="0x742d35Cc6634C0532925a3b844Bc9e7595f0bEb0",
        environment="test",
        log_dir=str(tmp_path / "logs"),
    )


@pytest.fixture
def sample_wallet_address():
    """Sample valid wallet address (lower-case, as the API echoes it)."""
    return "0xa2f9ebe6b91c2c4020e87c879445885ba54aebb7"


@pytest.fixture
def sample_transaction_hash():
    """Sample transaction hash for testing."""
    return "0x1234567890abcdef1234567890abcdef1234567890abcdef1234567890abcdef"


@pytest.fixture
def tx_result(sample_transaction_hash):
    return TransactionResult(
        tx_hash=sample_transaction_hash, block_number=12345, gas_used=51234
    )


@pytest.fixture
def mock_gateway(tx_result):
    """
    Mock ContractGateway.

    Defaults describe a healthy contract with one eligible user and
    100 USDT allocated to the global pool.
    """
    gateway = MagicMock()
    gateway.manager_address = "0x90F8bf6A479f320ead074411a4B0e7944Ea8c9C1"

    gateway.get_user_info = AsyncMock(return_value=make_user_info())
    gateway.get_eligible_users = AsyncMock(
        return_value=["0x1111111111111111111111111111111111111111"]
    )
    gateway.get_eligible_user_count = AsyncMock(return_value=1)
    gateway.is_eligible = AsyncMock(return_value=False)
    gateway.get_global_pool_stats = AsyncMock(
        return_value=GlobalPoolStats(
            total_allocated=100 * ONE_USDT,
            total_claimed=10 * ONE_USDT,
            total_pending=90 * ONE_USDT,
            eligible_count=1,
        )
    )
    gateway.get_global_pool_balance = AsyncMock(return_value=150 * ONE_USDT)
    gateway.get_contract_stats = AsyncMock(
        return_value=ContractStats(
            total_users=42,
            total_activated_users=30,
            global_pool_balance=150 * ONE_USDT,
            total_distributed=5 * ONE_USDT,
        )
    )
    gateway.add_eligible_user = AsyncMock(return_value=tx_result)
    gateway.remove_eligible_user = AsyncMock(return_value=tx_result)
    gateway.distribute_global_pool = AsyncMock(return_value=tx_result)
    gateway.test_connection = AsyncMock(
        return_value=ConnectionReport(
            success=True,
            network="ucchain-mainnet",
            chain_id="1137",
            manager_address=gateway.manager_address,
            manager_balance="1.5",
            total_users="42",
            is_manager=True,
        )
    )
    gateway.get_providers_status = AsyncMock(
        return_value={"primary": {"connected": True, "active": True}}
    )
    return gateway


@pytest.fixture
def user_info_factory():
    """Factory for UserInfo objects; see make_user_info for defaults."""
    return make_user_info
