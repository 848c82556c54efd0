"""
Base service class.

Provides common functionality for all service classes including access to
the contract gateway, settings and logging helpers.
"""

import functools
import time
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from typing import Any, TypeVar

from loguru import logger

from app.config.settings import Settings
from app.services.blockchain.contract_gateway import ContractGateway


T = TypeVar("T")


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and Z suffix."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class BaseService:
    """
    Base service class.

    Provides common functionality for all service classes:
    - Contract gateway and settings
    - Logging with bound service context
    """

    def __init__(self, gateway: ContractGateway, settings: Settings) -> None:
        """
        Initialize base service.

        Args:
            gateway: Contract gateway used for reads and writes
            settings: Application settings
        """
        self.gateway = gateway
        self.settings = settings
        self.logger = logger.bind(service=self.__class__.__name__)


def log_operation(
    func: Callable[..., Awaitable[T]],
) -> Callable[..., Awaitable[T]]:
    """
    Decorator to log method entry/exit with timing.

    Usage:
        @log_operation
        async def my_service_method(self, address: str):
            ...
    """
    @functools.wraps(func)
    async def wrapper(self: BaseService, *args: Any, **kwargs: Any) -> T:
        start_time = time.perf_counter()
        self.logger.debug(f"Starting {func.__name__}")

        try:
            result = await func(self, *args, **kwargs)
        except Exception as e:
            duration = time.perf_counter() - start_time
            self.logger.warning(
                f"Failed {func.__name__} after {duration:.3f}s: "
                f"{type(e).__name__}: {e}"
            )
            raise

        duration = time.perf_counter() - start_time
        self.logger.debug(f"Completed {func.__name__} in {duration:.3f}s")
        return result

    return wrapper
