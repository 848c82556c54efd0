"""
Contract Gateway - USDT Rain contract reads and manager writes.

All Web3 calls are synchronous and run through AsyncBlockchainExecutor.
Reads are retried; writes are sent once, signed by the manager wallet and
awaited until mined.
"""

import asyncio
from collections.abc import Callable
from typing import Any, TypeVar

from eth_utils import to_checksum_address
from loguru import logger
from web3 import Web3
from web3.contract import Contract

from app.config.constants import (
    BLOCKCHAIN_RECEIPT_TIMEOUT,
    BLOCKCHAIN_RETRY_DELAY_BASE,
    DISTRIBUTION_GAS_BUFFER_PERCENT,
    ELIGIBLE_USER_GAS_BUFFER_PERCENT,
    NATIVE_DECIMALS,
)
from app.config.settings import Settings
from app.utils.exceptions import BlockchainError
from app.utils.security import mask_address, mask_tx_hash

from .async_executor import AsyncBlockchainExecutor
from .core_constants import USDT_RAIN_ABI
from .gas_operations import GasManager
from .provider_manager import SyncProviderManager
from .rpc_wrapper import rpc_call_with_retry
from .types import (
    ConnectionReport,
    ContractStats,
    GlobalPoolStats,
    TransactionResult,
    UserInfo,
    format_amount,
)
from .wallet_operations import WalletManager


T = TypeVar("T")


class ContractGateway:
    """
    Async facade over the USDT Rain contract.

    Features:
    - Typed read helpers (user info, eligible list, pool and contract stats)
    - Manager writes with gas buffer and single-confirmation wait
    - Connection self-test used at startup and by /status
    """

    def __init__(
        self,
        settings: Settings,
        provider_manager: SyncProviderManager | None = None,
        wallet_manager: WalletManager | None = None,
        retry_delay_base: float = BLOCKCHAIN_RETRY_DELAY_BASE,
    ) -> None:
        """
        Initialize contract gateway.

        Args:
            settings: Application settings
            provider_manager: Prebuilt provider manager (built from settings if None)
            wallet_manager: Prebuilt wallet manager (built from settings if None)
            retry_delay_base: Backoff base for read retries
        """
        self.settings = settings
        self.contract_address = to_checksum_address(settings.contract_address)
        self.provider_manager = provider_manager or SyncProviderManager(settings)
        self.async_executor = AsyncBlockchainExecutor(self.provider_manager)
        self.wallet_manager = wallet_manager or WalletManager(settings)
        self.gas_manager = GasManager()
        self.retry_delay_base = retry_delay_base

        # One manager write in flight at a time keeps nonces sequential
        self._nonce_lock = asyncio.Lock()

        logger.debug(
            f"ContractGateway initialized: contract={self.contract_address}, "
            f"manager={mask_address(self.manager_address)}"
        )

    @property
    def manager_address(self) -> str:
        return self.wallet_manager.wallet_address or ""

    def _contract(self, w3: Web3) -> Contract:
        return w3.eth.contract(address=self.contract_address, abi=USDT_RAIN_ABI)

    # ========== Reads ==========

    async def _read(self, func: Callable[[Web3], T], operation_name: str) -> T:
        return await rpc_call_with_retry(
            lambda: self.async_executor.run_with_failover(func),
            operation_name=operation_name,
            retry_delay_base=self.retry_delay_base,
        )

    async def _call(self, fn_name: str, *args: Any) -> Any:
        def _do(w3: Web3) -> Any:
            return getattr(self._contract(w3).functions, fn_name)(*args).call()

        return await self._read(_do, fn_name)

    async def get_user_info(self, address: str) -> UserInfo:
        raw = await self._call("getUserInfo", to_checksum_address(address))
        return UserInfo.from_tuple(raw)

    async def get_eligible_users(self) -> list[str]:
        return list(await self._call("getEligibleUsers"))

    async def get_eligible_user_count(self) -> int:
        return int(await self._call("eligibleUserCount"))

    async def get_user_address_by_id(self, user_id: int) -> str:
        return await self._call("getUserAddressById", int(user_id))

    async def get_total_users(self) -> int:
        return int(await self._call("totalUsers"))

    async def get_manager(self) -> str:
        return await self._call("manager")

    async def get_global_pool_stats(self) -> GlobalPoolStats:
        return GlobalPoolStats.from_tuple(await self._call("getGlobalPoolStats"))

    async def get_global_pool_balance(self) -> int:
        return int(await self._call("globalPoolBalance"))

    async def get_contract_stats(self) -> ContractStats:
        return ContractStats.from_tuple(await self._call("getContractStats"))

    async def get_chain_id(self) -> int:
        return int(await self._read(lambda w3: w3.eth.chain_id, "chain_id"))

    async def get_manager_balance(self) -> int:
        """Native balance of the manager wallet in wei."""
        address = self.manager_address
        return int(await self._read(lambda w3: w3.eth.get_balance(address), "get_balance"))

    async def is_eligible(self, address: str) -> bool:
        """Case-insensitive membership in getEligibleUsers()."""
        wanted = address.lower()
        return any(a.lower() == wanted for a in await self.get_eligible_users())

    async def get_providers_status(self) -> dict[str, dict]:
        return await self.provider_manager.get_providers_status(
            self.async_executor.executor
        )

    # ========== Writes ==========

    async def _send_transaction(
        self,
        fn_name: str,
        *args: Any,
        gas_buffer_percent: int,
    ) -> TransactionResult:
        """
        Sign, send and await a manager transaction.

        Args:
            fn_name: Contract function name
            *args: Function arguments
            gas_buffer_percent: Percentage applied to the gas estimate

        Returns:
            TransactionResult of the mined transaction

        Raises:
            ContractLogicError: If gas estimation reverts
            ValueError: If gas estimation fails for another reason (e.g.
                insufficient funds); node errors propagate unchanged
            BlockchainError: If the wallet is missing or the tx reverts
        """
        account = self.wallet_manager.wallet_account
        if account is None:
            raise BlockchainError("Manager wallet not configured")
        sender = self.manager_address

        def _send(w3: Web3) -> str:
            func = getattr(self._contract(w3).functions, fn_name)(*args)
            logger.info(f"Estimating gas for {fn_name} transaction")
            gas_limit = self.gas_manager.estimate_gas_limit(
                func, sender, gas_buffer_percent
            )
            txn = func.build_transaction({
                "from": sender,
                "gas": gas_limit,
                "gasPrice": self.gas_manager.get_gas_price(w3),
                "nonce": w3.eth.get_transaction_count(sender, "pending"),
                "chainId": self.settings.chain_id,
            })
            logger.info(f"Sending {fn_name} transaction: gas_limit={gas_limit}")
            signed = account.sign_transaction(txn)
            return Web3.to_hex(w3.eth.send_raw_transaction(signed.raw_transaction))

        async with self._nonce_lock:
            # Never re-broadcast on another provider
            tx_hash = await self.async_executor.run_with_failover(
                _send, allow_failover=False
            )

        logger.info(f"Waiting for confirmation: {mask_tx_hash(tx_hash)}")
        receipt = await self.async_executor.run_with_failover(
            lambda w3: w3.eth.wait_for_transaction_receipt(
                tx_hash, timeout=BLOCKCHAIN_RECEIPT_TIMEOUT
            ),
            timeout=BLOCKCHAIN_RECEIPT_TIMEOUT + 5,
        )

        if receipt["status"] != 1:
            logger.error(f"{fn_name} transaction reverted: {tx_hash}")
            raise BlockchainError(f"{fn_name} execution reverted", tx_hash=tx_hash)

        result = TransactionResult(
            tx_hash=tx_hash,
            block_number=int(receipt["blockNumber"]),
            gas_used=int(receipt["gasUsed"]),
        )
        logger.success(
            f"{fn_name} confirmed in block {result.block_number} "
            f"(gas used {result.gas_used})"
        )
        return result

    async def add_eligible_user(self, address: str) -> TransactionResult:
        return await self._send_transaction(
            "addEligibleUser",
            to_checksum_address(address),
            gas_buffer_percent=ELIGIBLE_USER_GAS_BUFFER_PERCENT,
        )

    async def remove_eligible_user(self, address: str) -> TransactionResult:
        return await self._send_transaction(
            "removeEligibleUser",
            to_checksum_address(address),
            gas_buffer_percent=ELIGIBLE_USER_GAS_BUFFER_PERCENT,
        )

    async def distribute_global_pool(self) -> TransactionResult:
        return await self._send_transaction(
            "distributeGlobalPoolVirtual",
            gas_buffer_percent=DISTRIBUTION_GAS_BUFFER_PERCENT,
        )

    # ========== Health ==========

    async def test_connection(self) -> ConnectionReport:
        """
        Check RPC connectivity, the manager wallet and contract access.

        Never raises: failures are reported in the returned object.
        """
        manager_address = self.manager_address
        logger.info("Testing blockchain connection...")

        def _snapshot(w3: Web3) -> tuple[int, int, int, str]:
            contract = self._contract(w3)
            return (
                w3.eth.chain_id,
                w3.eth.get_balance(manager_address),
                contract.functions.totalUsers().call(),
                contract.functions.manager().call(),
            )

        try:
            chain_id, balance, total_users, contract_manager = (
                await self.async_executor.run_with_failover(_snapshot)
            )
        except Exception as e:
            logger.error(f"Blockchain connection test failed: {e}")
            return ConnectionReport(success=False, error=str(e))

        is_manager = contract_manager.lower() == manager_address.lower()
        logger.info(
            f"Connected to {self.settings.network_name} (Chain ID: {chain_id}), "
            f"total users: {total_users}"
        )
        if not is_manager:
            logger.warning(
                "Manager wallet is not the contract manager: "
                "adding/removing eligible users will fail"
            )

        return ConnectionReport(
            success=True,
            network=self.settings.network_name,
            chain_id=str(chain_id),
            manager_address=manager_address,
            manager_balance=format_amount(balance, NATIVE_DECIMALS),
            total_users=str(total_users),
            is_manager=is_manager,
        )

    def close(self) -> None:
        """Release executor threads and the signing account."""
        self.async_executor.cleanup()
        self.wallet_manager.cleanup()
