"""
System service.

Health, status and aggregate contract statistics.
"""

import asyncio
from typing import Any

from app.config.constants import APP_VERSION
from app.services.base_service import BaseService, log_operation, utc_now_iso
from app.services.blockchain.types import token_amount


class SystemService(BaseService):
    """Service health and contract-wide statistics."""

    def health(self) -> dict[str, Any]:
        """Liveness payload. Does not touch the RPC node."""
        return {
            "status": "healthy",
            "timestamp": utc_now_iso(),
            "version": APP_VERSION,
            "environment": self.settings.environment,
        }

    @log_operation
    async def status(self, include_providers: bool = False) -> tuple[dict[str, Any], int]:
        """
        System status with a live blockchain connection check.

        Args:
            include_providers: Add per-provider RPC status to the blockchain block

        Returns:
            Tuple of (payload, HTTP status): 200 when the connection check
            succeeded, 503 otherwise
        """
        self.logger.info("System status check requested")

        report = await self.gateway.test_connection()
        blockchain = report.to_dict()
        if include_providers:
            blockchain["providers"] = await self.gateway.get_providers_status()

        payload = {
            "system": {
                "status": "operational",
                "timestamp": utc_now_iso(),
                "version": APP_VERSION,
                "environment": self.settings.environment,
            },
            "blockchain": blockchain,
            "configuration": {
                "network": self.settings.network_name,
                "chainId": self.settings.chain_id,
                "contractAddress": self.settings.contract_address,
                "managerAddress": self.gateway.manager_address,
            },
        }
        return payload, 200 if report.success else 503

    @log_operation
    async def contract_stats(self) -> dict[str, Any]:
        """Users, global pool and network figures in one payload."""
        self.logger.info("Fetching contract statistics")

        contract_stats, pool_stats, eligible_users = await asyncio.gather(
            self.gateway.get_contract_stats(),
            self.gateway.get_global_pool_stats(),
            self.gateway.get_eligible_users(),
        )

        return {
            "users": {
                "total": str(contract_stats.total_users),
                "activated": str(contract_stats.total_activated_users),
                "eligible": str(len(eligible_users)),
            },
            "globalPool": {
                "balance": token_amount(contract_stats.global_pool_balance),
                "totalDistributed": token_amount(contract_stats.total_distributed),
                "totalAllocated": token_amount(pool_stats.total_allocated),
                "totalPending": token_amount(pool_stats.total_pending),
            },
            "network": {
                "name": self.settings.network_name,
                "chainId": self.settings.chain_id,
            },
            "lastUpdated": utc_now_iso(),
        }
