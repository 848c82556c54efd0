"""
Synchronous Web3 provider management with failover support.

This module handles:
- Primary and backup RPC provider initialization
- Active provider tracking and switching
- Provider status checks
"""

import asyncio
import threading
from concurrent.futures import Executor

from loguru import logger
from web3 import Web3
from web3.middleware import ExtraDataToPOAMiddleware

from app.config.constants import BLOCKCHAIN_EXECUTOR_TIMEOUT, BLOCKCHAIN_RPC_TIMEOUT
from app.config.settings import Settings


PRIMARY_PROVIDER = "primary"
BACKUP_PROVIDER = "backup"


def build_web3(rpc_url: str, timeout: int = BLOCKCHAIN_RPC_TIMEOUT) -> Web3:
    """
    Create an HTTP Web3 client for a PoA-style chain.

    Args:
        rpc_url: JSON-RPC endpoint
        timeout: HTTP timeout in seconds

    Returns:
        Web3 instance with the extra-data PoA middleware injected
    """
    w3 = Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": timeout}))
    w3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)
    return w3


class SyncProviderManager:
    """
    Manages synchronous Web3 providers with automatic failover.

    The primary provider is built from RPC_URL, the optional backup from
    RPC_BACKUP_URL. The executor switches to the backup when the primary
    fails.
    """

    def __init__(self, settings: Settings) -> None:
        """
        Initialize provider manager.

        Args:
            settings: Application settings containing RPC URLs
        """
        self.settings = settings
        self.providers: dict[str, Web3] = {}
        self._provider_lock = threading.Lock()
        self.active_provider_name = PRIMARY_PROVIDER
        self.is_auto_switch_enabled = True

        self._init_providers()

    def _init_providers(self) -> None:
        """Initialize Web3 providers based on settings."""
        urls = {
            PRIMARY_PROVIDER: self.settings.rpc_url,
            BACKUP_PROVIDER: self.settings.rpc_backup_url,
        }
        for name, url in urls.items():
            if not url:
                continue
            try:
                self.providers[name] = build_web3(url)
                logger.info(f"RPC provider '{name}' configured")
            except (ValueError, TypeError) as e:
                logger.error(f"Failed to init RPC provider '{name}': {e}")

        if not self.providers:
            logger.error("NO BLOCKCHAIN PROVIDERS AVAILABLE! Service will fail.")

        self.is_auto_switch_enabled = len(self.providers) > 1

    def get_active_web3(self) -> Web3:
        """
        Get the currently active Web3 instance.

        Raises:
            ConnectionError: If no providers are available
        """
        with self._provider_lock:
            provider = self.providers.get(self.active_provider_name)
            if provider:
                return provider
            if self.providers:
                fallback_name = next(iter(self.providers))
                logger.warning(
                    f"Active provider '{self.active_provider_name}' not found, "
                    f"falling back to '{fallback_name}'"
                )
                self.active_provider_name = fallback_name
                return self.providers[fallback_name]
            raise ConnectionError("No blockchain providers available")

    def backup_for(self, name: str) -> str | None:
        """Name of a provider other than ``name``, if any."""
        return next((n for n in self.providers if n != name), None)

    def switch_to(self, name: str) -> None:
        with self._provider_lock:
            if name not in self.providers:
                raise KeyError(f"Unknown provider: {name}")
            if self.active_provider_name != name:
                logger.warning(
                    f"Switching RPC provider: {self.active_provider_name} -> {name}"
                )
            self.active_provider_name = name

    async def get_providers_status(self, executor: Executor) -> dict[str, dict]:
        """
        Ping every provider for its latest block.

        Args:
            executor: Thread pool used for the blocking calls

        Returns:
            Mapping of provider name to connected/block/active info
        """
        loop = asyncio.get_running_loop()
        status: dict[str, dict] = {}
        for name, w3 in self.providers.items():
            with self._provider_lock:
                is_active = name == self.active_provider_name
            try:
                block = await asyncio.wait_for(
                    loop.run_in_executor(executor, lambda w3=w3: w3.eth.block_number),
                    timeout=BLOCKCHAIN_EXECUTOR_TIMEOUT,
                )
                status[name] = {"connected": True, "block": block, "active": is_active}
            except TimeoutError:
                logger.warning(f"Timeout checking provider '{name}' status")
                status[name] = {"connected": False, "error": "Timeout", "active": is_active}
            except (ConnectionError, OSError, ValueError) as e:
                logger.warning(f"Error checking provider '{name}' status: {e}")
                status[name] = {"connected": False, "error": str(e), "active": is_active}
        return status
