"""
Async executor for blockchain operations with failover support.

Provides async execution of synchronous Web3 operations with automatic
failover between the configured RPC providers.
"""

import asyncio
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from typing import Any, TypeVar

from loguru import logger
from web3 import Web3

from app.config.constants import BLOCKCHAIN_EXECUTOR_TIMEOUT, BLOCKCHAIN_EXECUTOR_WORKERS

from .provider_manager import SyncProviderManager


T = TypeVar("T")

# Errors that indicate the provider (not the call) is at fault
FAILOVER_ERRORS = (ConnectionError, TimeoutError, OSError)


class AsyncBlockchainExecutor:
    """
    Async executor for blockchain operations.

    Handles:
    - Thread pool execution of sync Web3 calls
    - Automatic failover between providers
    - Timeout handling
    """

    def __init__(
        self,
        provider_manager: SyncProviderManager,
        max_workers: int = BLOCKCHAIN_EXECUTOR_WORKERS,
    ) -> None:
        """
        Initialize async executor.

        Args:
            provider_manager: SyncProviderManager instance
            max_workers: Maximum thread pool workers
        """
        self.provider_manager = provider_manager
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="web3",
        )

    @property
    def executor(self) -> ThreadPoolExecutor:
        return self._executor

    async def _run_on(
        self,
        name: str,
        sync_func: Callable[[Web3], T],
        timeout: float,
    ) -> T:
        w3 = self.provider_manager.providers[name]
        loop = asyncio.get_running_loop()
        try:
            return await asyncio.wait_for(
                loop.run_in_executor(self._executor, lambda: sync_func(w3)),
                timeout=timeout,
            )
        except TimeoutError:
            logger.error(f"Timeout in blockchain operation on provider '{name}'")
            raise TimeoutError(f"Blockchain operation timeout on {name}")

    async def run_with_failover(
        self,
        sync_func: Callable[[Web3], T],
        timeout: float = BLOCKCHAIN_EXECUTOR_TIMEOUT,
        allow_failover: bool = True,
    ) -> T:
        """
        Run a synchronous Web3 function with failover logic.

        Args:
            sync_func: Synchronous function that takes Web3 instance as argument
            timeout: Per-attempt timeout in seconds
            allow_failover: Retry on the backup provider after a provider error.
                Writes pass False so a transaction is never broadcast twice.

        Returns:
            Result from the function

        Raises:
            Exception: If all providers fail
        """
        self.provider_manager.get_active_web3()
        current_name = self.provider_manager.active_provider_name

        try:
            return await self._run_on(current_name, sync_func, timeout)
        except FAILOVER_ERRORS as e:
            if not (allow_failover and self.provider_manager.is_auto_switch_enabled):
                raise

            backup_name = self.provider_manager.backup_for(current_name)
            if not backup_name:
                raise

            logger.warning(
                f"Provider '{current_name}' failed: {e}. Trying backup '{backup_name}'..."
            )
            try:
                result = await self._run_on(backup_name, sync_func, timeout)
            except Exception as e2:
                logger.error(f"Backup provider failed: {e2}")
                raise e from e2

            self.provider_manager.switch_to(backup_name)
            return result
        except asyncio.CancelledError:
            logger.warning("Blockchain operation cancelled")
            raise

    def cleanup(self) -> None:
        """Clean up thread pool executor."""
        self._executor.shutdown(wait=True)
