"""
Unit tests for ContractGateway.

The Web3 layer is never contacted. Most tests replace the executor's
run_with_failover; the failover and transaction tests run the real executor
against MagicMock providers.
"""

import threading
from unittest.mock import AsyncMock, MagicMock

import pytest
from eth_account import Account
from eth_utils import to_checksum_address
from web3.exceptions import Web3RPCError

from app.services.blockchain.async_executor import AsyncBlockchainExecutor
from app.services.blockchain.contract_gateway import ContractGateway
from app.services.blockchain.provider_manager import SyncProviderManager
from app.utils.exceptions import BlockchainError


@pytest.fixture
def gateway(settings):
    gw = ContractGateway(settings, retry_delay_base=0)
    yield gw
    gw.close()


class TestProviders:
    """Tests for provider setup."""

    def test_primary_only(self, settings):
        manager = SyncProviderManager(settings)
        assert list(manager.providers) == ["primary"]
        assert manager.is_auto_switch_enabled is False

    def test_backup_enables_auto_switch(self, settings):
        manager = SyncProviderManager(
            settings.model_copy(update={"rpc_backup_url": "http://127.0.0.1:8546"})
        )
        assert manager.backup_for("primary") == "backup"
        assert manager.is_auto_switch_enabled is True

        manager.switch_to("backup")
        assert manager.active_provider_name == "backup"


class TestReads:
    """Tests for typed read helpers."""

    @pytest.mark.asyncio
    async def test_get_user_info_decodes_tuple(self, gateway):
        raw = (7, 1, 12, 0, 0, True, 1_700_000_000, 0, 0, "alice", "+100")
        gateway.async_executor.run_with_failover = AsyncMock(return_value=raw)

        info = await gateway.get_user_info("0xa2f9ebe6b91c2c4020e87c879445885ba54aebb7")

        assert info.user_id == 7
        assert info.has_profile

    @pytest.mark.asyncio
    async def test_is_eligible_is_case_insensitive(self, gateway):
        gateway.async_executor.run_with_failover = AsyncMock(
            return_value=["0xA2F9EBE6B91C2C4020E87C879445885BA54AEBB7"]
        )

        assert await gateway.is_eligible("0xa2f9ebe6b91c2c4020e87c879445885ba54aebb7")
        assert not await gateway.is_eligible("0x" + "1" * 40)

    @pytest.mark.asyncio
    async def test_read_failure_becomes_blockchain_error(self, gateway):
        gateway.async_executor.run_with_failover = AsyncMock(
            side_effect=ConnectionError("connection refused")
        )

        with pytest.raises(BlockchainError, match="totalUsers failed after 3 attempts"):
            await gateway.get_total_users()


class TestConnection:
    """Tests for the startup connection check."""

    @pytest.mark.asyncio
    async def test_success_as_manager(self, gateway):
        gateway.async_executor.run_with_failover = AsyncMock(
            return_value=(1137, 1_500_000_000_000_000_000, 42, gateway.manager_address.lower())
        )

        report = await gateway.test_connection()

        assert report.success is True
        assert report.chain_id == "1137"
        assert report.manager_balance == "1.5"
        assert report.total_users == "42"
        assert report.is_manager is True

    @pytest.mark.asyncio
    async def test_not_manager(self, gateway):
        gateway.async_executor.run_with_failover = AsyncMock(
            return_value=(1137, 0, 0, "0x" + "2" * 40)
        )

        report = await gateway.test_connection()

        assert report.success is True
        assert report.is_manager is False

    @pytest.mark.asyncio
    async def test_failure_never_raises(self, gateway):
        gateway.async_executor.run_with_failover = AsyncMock(
            side_effect=ConnectionError("connection refused")
        )

        report = await gateway.test_connection()

        assert report.success is False
        assert "connection refused" in report.error
        assert report.to_dict() == {"success": False, "error": report.error}


class TestWrites:
    """Tests for manager transactions."""

    @pytest.mark.asyncio
    async def test_add_eligible_user_returns_receipt_summary(
        self, gateway, sample_transaction_hash
    ):
        receipt = {"status": 1, "blockNumber": 100, "gasUsed": 51234}
        gateway.async_executor.run_with_failover = AsyncMock(
            side_effect=[sample_transaction_hash, receipt]
        )

        result = await gateway.add_eligible_user("0xa2f9ebe6b91c2c4020e87c879445885ba54aebb7")

        assert result.tx_hash == sample_transaction_hash
        assert result.block_number == 100
        assert result.to_dict()["gasUsed"] == "51234"

        send_call = gateway.async_executor.run_with_failover.await_args_list[0]
        assert send_call.kwargs["allow_failover"] is False

    @pytest.mark.asyncio
    async def test_reverted_transaction_raises_with_hash(
        self, gateway, sample_transaction_hash
    ):
        receipt = {"status": 0, "blockNumber": 100, "gasUsed": 21000}
        gateway.async_executor.run_with_failover = AsyncMock(
            side_effect=[sample_transaction_hash, receipt]
        )

        with pytest.raises(BlockchainError) as exc_info:
            await gateway.distribute_global_pool()

        assert exc_info.value.tx_hash == sample_transaction_hash

    @pytest.mark.asyncio
    async def test_missing_wallet(self, gateway):
        gateway.wallet_manager.cleanup()

        with pytest.raises(BlockchainError, match="Manager wallet not configured"):
            await gateway.remove_eligible_user("0x" + "1" * 40)


@pytest.fixture
def two_providers(settings):
    manager = SyncProviderManager(
        settings.model_copy(update={"rpc_backup_url": "http://127.0.0.1:8546"})
    )
    manager.providers = {
        "primary": MagicMock(name="primary"),
        "backup": MagicMock(name="backup"),
    }
    return manager


@pytest.fixture
def executor(two_providers):
    ex = AsyncBlockchainExecutor(two_providers, max_workers=2)
    yield ex
    ex.cleanup()


class TestFailover:
    """Tests for AsyncBlockchainExecutor.run_with_failover."""

    @pytest.mark.asyncio
    async def test_switches_to_backup_on_provider_error(self, executor, two_providers):
        primary = two_providers.providers["primary"]

        def call(w3):
            if w3 is primary:
                raise ConnectionError("connection refused")
            return "from backup"

        assert await executor.run_with_failover(call) == "from backup"
        assert two_providers.active_provider_name == "backup"

    @pytest.mark.asyncio
    async def test_no_failover_for_writes(self, executor, two_providers):
        used = []

        def call(w3):
            used.append(w3)
            raise ConnectionError("connection refused")

        with pytest.raises(ConnectionError):
            await executor.run_with_failover(call, allow_failover=False)

        assert used == [two_providers.providers["primary"]]
        assert two_providers.active_provider_name == "primary"

    @pytest.mark.asyncio
    async def test_call_errors_do_not_fail_over(self, executor, two_providers):
        used = []

        def call(w3):
            used.append(w3)
            raise Web3RPCError("execution reverted")

        with pytest.raises(Web3RPCError):
            await executor.run_with_failover(call)

        assert len(used) == 1
        assert two_providers.active_provider_name == "primary"

    @pytest.mark.asyncio
    async def test_both_providers_down_raises_primary_error(self, executor, two_providers):
        names = {w3: name for name, w3 in two_providers.providers.items()}

        def call(w3):
            raise ConnectionError(f"{names[w3]} down")

        with pytest.raises(ConnectionError, match="primary down") as exc_info:
            await executor.run_with_failover(call)

        assert "backup down" in str(exc_info.value.__cause__)
        assert two_providers.active_provider_name == "primary"

    @pytest.mark.asyncio
    async def test_timeout_is_per_attempt(self, executor, two_providers):
        primary = two_providers.providers["primary"]
        release = threading.Event()

        def call(w3):
            if w3 is primary:
                release.wait(5)
                return "too late"
            return "from backup"

        try:
            result = await executor.run_with_failover(call, timeout=0.05)
        finally:
            release.set()

        assert result == "from backup"
        assert two_providers.active_provider_name == "backup"

    @pytest.mark.asyncio
    async def test_timeout_without_backup(self, settings):
        manager = SyncProviderManager(settings)
        manager.providers = {"primary": MagicMock(name="primary")}
        release = threading.Event()
        ex = AsyncBlockchainExecutor(manager, max_workers=1)

        try:
            with pytest.raises(TimeoutError, match="timeout on primary"):
                await ex.run_with_failover(lambda w3: release.wait(5), timeout=0.05)
        finally:
            release.set()
            ex.cleanup()


RAW_TX_HASH = bytes.fromhex("ab" * 32)


def fake_node(receipt_status=1):
    w3 = MagicMock(name="node")
    w3.eth.gas_price = 2_000_000_000
    w3.eth.get_transaction_count.return_value = 5
    w3.eth.send_raw_transaction.return_value = RAW_TX_HASH
    w3.eth.wait_for_transaction_receipt.return_value = {
        "status": receipt_status,
        "blockNumber": 100,
        "gasUsed": 51234,
    }
    return w3


@pytest.fixture
def node(gateway):
    w3 = fake_node()
    gateway.provider_manager.providers = {"primary": w3}
    return w3


@pytest.fixture
def contract(gateway):
    fake = MagicMock(name="contract")

    def build_transaction(params):
        return {**params, "to": gateway.contract_address, "data": "0x", "value": 0}

    for fn_name in ("addEligibleUser", "removeEligibleUser", "distributeGlobalPoolVirtual"):
        bound = getattr(fake.functions, fn_name).return_value
        bound.estimate_gas.return_value = 51_234
        bound.build_transaction.side_effect = build_transaction

    gateway._contract = lambda w3: fake
    return fake


class TestTransactionBuilding:
    """Tests for the signed transaction sent by manager writes."""

    USER = "0xa2f9ebe6b91c2c4020e87c879445885ba54aebb7"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("method", "fn_name", "expected_gas"),
        [
            ("add_eligible_user", "addEligibleUser", 51_234 * 120 // 100),
            ("remove_eligible_user", "removeEligibleUser", 51_234 * 120 // 100),
        ],
    )
    async def test_eligible_user_writes(
        self, gateway, node, contract, method, fn_name, expected_gas
    ):
        result = await getattr(gateway, method)(self.USER)

        getattr(contract.functions, fn_name).assert_called_once_with(
            to_checksum_address(self.USER)
        )
        bound = getattr(contract.functions, fn_name).return_value
        bound.estimate_gas.assert_called_once_with({"from": gateway.manager_address})
        bound.build_transaction.assert_called_once_with({
            "from": gateway.manager_address,
            "gas": expected_gas,
            "gasPrice": 2_000_000_000,
            "nonce": 5,
            "chainId": 1137,
        })
        assert result.tx_hash == "0x" + "ab" * 32
        assert result.block_number == 100

    @pytest.mark.asyncio
    async def test_distribution_uses_larger_buffer(self, gateway, node, contract):
        await gateway.distribute_global_pool()

        contract.functions.distributeGlobalPoolVirtual.assert_called_once_with()
        bound = contract.functions.distributeGlobalPoolVirtual.return_value
        assert bound.build_transaction.call_args.args[0]["gas"] == 51_234 * 130 // 100

    @pytest.mark.asyncio
    async def test_nonce_from_pending_block(self, gateway, node, contract):
        await gateway.add_eligible_user(self.USER)

        node.eth.get_transaction_count.assert_called_once_with(
            gateway.manager_address, "pending"
        )

    @pytest.mark.asyncio
    async def test_raw_transaction_signed_by_manager(self, gateway, node, contract):
        await gateway.add_eligible_user(self.USER)

        raw = node.eth.send_raw_transaction.call_args.args[0]
        assert Account.recover_transaction(raw) == gateway.manager_address
        node.eth.wait_for_transaction_receipt.assert_called_once()
        assert node.eth.wait_for_transaction_receipt.call_args.args[0] == "0x" + "ab" * 32

    @pytest.mark.asyncio
    async def test_estimation_failure_sends_nothing(self, gateway, node, contract):
        contract.functions.addEligibleUser.return_value.estimate_gas.side_effect = (
            ValueError("insufficient funds for gas * price + value")
        )

        with pytest.raises(ValueError, match="insufficient funds"):
            await gateway.add_eligible_user(self.USER)

        node.eth.send_raw_transaction.assert_not_called()
