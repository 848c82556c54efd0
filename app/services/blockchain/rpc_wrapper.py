"""
RPC Wrapper with Timeout and Retry Logic.

Provides centralized timeout and retry functionality for contract reads.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

from loguru import logger
from web3.exceptions import ContractLogicError

from app.config.constants import (
    BLOCKCHAIN_MAX_RETRIES,
    BLOCKCHAIN_RETRY_DELAY_BASE,
    BLOCKCHAIN_TIMEOUT,
)
from app.utils.exceptions import BlockchainError


T = TypeVar("T")


class BlockchainTimeoutError(BlockchainError):
    """Raised when blockchain RPC call times out."""
    pass


async def with_timeout(
    coro: Awaitable[T],
    timeout: float = BLOCKCHAIN_TIMEOUT,
    operation_name: str = "RPC call",
) -> T:
    """
    Execute async coroutine with timeout.

    Args:
        coro: Coroutine to execute
        timeout: Timeout in seconds (default: BLOCKCHAIN_TIMEOUT)
        operation_name: Operation name for logging

    Raises:
        BlockchainTimeoutError: If operation times out
    """
    try:
        return await asyncio.wait_for(coro, timeout=timeout)
    except TimeoutError as e:
        error_msg = f"{operation_name} timed out after {timeout}s"
        logger.error(error_msg)
        raise BlockchainTimeoutError(error_msg) from e


async def rpc_call_with_retry(
    coro_factory: Callable[[], Awaitable[T]],
    max_retries: int = BLOCKCHAIN_MAX_RETRIES,
    timeout: float = BLOCKCHAIN_TIMEOUT,
    operation_name: str = "RPC call",
    retry_delay_base: float = BLOCKCHAIN_RETRY_DELAY_BASE,
) -> T:
    """
    Execute RPC call with retry logic and timeout.

    Contract reverts are deterministic and are re-raised immediately.

    Args:
        coro_factory: Factory function that returns a coroutine
        max_retries: Maximum number of attempts
        timeout: Timeout per attempt in seconds
        operation_name: Operation name for logging
        retry_delay_base: Base of the exponential backoff (0 disables sleeping)

    Raises:
        BlockchainTimeoutError: If the last attempt timed out
        BlockchainError: If all attempts fail with errors
        ContractLogicError: If the contract reverted
    """
    last_error: Exception | None = None

    for attempt in range(max_retries):
        try:
            result = await with_timeout(
                coro_factory(),
                timeout=timeout,
                operation_name=f"{operation_name} (attempt {attempt + 1}/{max_retries})",
            )
            if attempt > 0:
                logger.success(f"{operation_name} succeeded on attempt {attempt + 1}")
            return result

        except ContractLogicError:
            raise

        except Exception as e:
            last_error = e

            if attempt < max_retries - 1:
                delay = retry_delay_base ** attempt if retry_delay_base else 0
                logger.warning(
                    f"{operation_name} failed on attempt {attempt + 1}/{max_retries}: {e}. "
                    f"Retrying in {delay}s..."
                )
                await asyncio.sleep(delay)
            else:
                logger.error(f"{operation_name} failed after {max_retries} attempts: {e}")

    if isinstance(last_error, BlockchainTimeoutError):
        raise last_error
    raise BlockchainError(
        f"{operation_name} failed after {max_retries} attempts: {last_error}"
    ) from last_error


__all__ = ["BlockchainTimeoutError", "rpc_call_with_retry", "with_timeout"]
