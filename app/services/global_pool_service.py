"""
Global pool service.

Reads global pool statistics and triggers the contract's virtual
distribution among eligible users.
"""

import asyncio
from typing import Any

from app.services.base_service import BaseService, log_operation, utc_now_iso
from app.services.blockchain.types import format_amount, token_amount
from app.utils.exceptions import ValidationError
from app.utils.security import mask_tx_hash


class GlobalPoolService(BaseService):
    """Global pool statistics and distribution."""

    @log_operation
    async def get_stats(self) -> dict[str, Any]:
        """
        Get global pool statistics.

        Returns:
            Allocated/claimed/pending amounts (wei and formatted),
            eligible count reported by the pool, current pool balance and
            the number of addresses in the eligible list.
        """
        self.logger.info("Fetching global pool statistics")

        stats, balance, eligible_users = await asyncio.gather(
            self.gateway.get_global_pool_stats(),
            self.gateway.get_global_pool_balance(),
            self.gateway.get_eligible_users(),
        )

        return {
            "totalAllocated": token_amount(stats.total_allocated),
            "totalClaimed": token_amount(stats.total_claimed),
            "totalPending": token_amount(stats.total_pending),
            "eligibleCount": str(stats.eligible_count),
            "currentBalance": token_amount(balance),
            "eligibleUsers": len(eligible_users),
            "lastUpdated": utc_now_iso(),
        }

    @log_operation
    async def distribute(self) -> dict[str, Any]:
        """
        Run the virtual global pool distribution.

        The allocated balance is split evenly (integer division) among the
        eligible users by the contract; the summary returned here mirrors
        that split from the pre-distribution stats.

        Raises:
            ValidationError: No eligible users or nothing allocated
            BlockchainError: Transaction failed or reverted
        """
        self.logger.info("Starting global pool distribution")

        stats_before, eligible_users = await asyncio.gather(
            self.gateway.get_global_pool_stats(),
            self.gateway.get_eligible_users(),
        )

        eligible_count = len(eligible_users)
        balance_before = stats_before.total_allocated

        if eligible_count == 0:
            raise ValidationError("No eligible users found for distribution")
        if balance_before == 0:
            raise ValidationError("No funds available for distribution")

        tx = await self.gateway.distribute_global_pool()
        self.logger.success(
            f"Global pool distribution confirmed: {mask_tx_hash(tx.tx_hash)} "
            f"in block {tx.block_number}"
        )

        stats_after = await self.gateway.get_global_pool_stats()

        return {
            "message": (
                f"Global pool successfully distributed to "
                f"{eligible_count} eligible users"
            ),
            "data": {
                "distribution": {
                    "eligibleUsers": eligible_count,
                    "totalDistributed": token_amount(balance_before),
                    "perUser": token_amount(balance_before // eligible_count),
                },
                "before": {
                    "totalAllocated": format_amount(stats_before.total_allocated),
                    "totalPending": format_amount(stats_before.total_pending),
                },
                "after": {
                    "totalAllocated": format_amount(stats_after.total_allocated),
                    "totalPending": format_amount(stats_after.total_pending),
                },
                "transaction": tx.to_dict(),
            },
        }
