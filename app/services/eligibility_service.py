"""
Eligible users service.

Manages the contract's global-pool eligible list: listing, checking,
adding (after registration, activation and referral checks) and removing.
"""

import asyncio
from typing import Any

from app.services.base_service import BaseService, log_operation
from app.services.blockchain.types import UserInfo
from app.utils.exceptions import NotFoundError, ValidationError
from app.utils.security import mask_address
from app.validators.unified import require_wallet_address


class EligibilityService(BaseService):
    """
    Eligible list operations on top of ContractGateway.

    Addresses are validated and lower-cased on entry; membership checks
    are case-insensitive.
    """

    async def _user_summary(self, address: str) -> dict[str, Any]:
        """User fields shown in the eligible list; nulls on lookup failure."""
        try:
            info = await self.gateway.get_user_info(address)
        except Exception as e:
            self.logger.warning(f"Failed to get info for user {address}: {e}")
            return {
                "address": address,
                "userId": None,
                "directReferrals": None,
                "isActive": False,
                "userName": None,
            }
        return {
            "address": address,
            "userId": str(info.user_id),
            "directReferrals": str(info.direct_referrals),
            "isActive": info.is_active,
            "userName": info.user_name or None,
        }

    async def _registered_user(self, address: str) -> UserInfo:
        info = await self.gateway.get_user_info(address)
        if not info.is_registered:
            raise NotFoundError("User is not registered in the system")
        return info

    @log_operation
    async def list_eligible_users(self) -> dict[str, Any]:
        """
        List eligible users with their basic info.

        Returns:
            {"eligibleUsers": [...], "totalCount": "<eligibleUserCount()>"}
        """
        self.logger.info("Fetching eligible users list")
        addresses = await self.gateway.get_eligible_users()
        total_count = await self.gateway.get_eligible_user_count()

        users = await asyncio.gather(
            *(self._user_summary(address) for address in addresses)
        )
        return {"eligibleUsers": list(users), "totalCount": str(total_count)}

    @log_operation
    async def check_eligibility(self, address: Any) -> dict[str, Any]:
        """
        Report whether a registered user is in the eligible list.

        Raises:
            ValidationError: Bad address
            NotFoundError: User not registered
        """
        valid_address = require_wallet_address(address)
        self.logger.info(f"Checking eligibility for: {mask_address(valid_address)}")

        info = await self._registered_user(valid_address)
        is_eligible = await self.gateway.is_eligible(valid_address)

        return {
            "address": valid_address,
            "userId": str(info.user_id),
            "isEligible": is_eligible,
            "directReferrals": str(info.direct_referrals),
            "isActive": info.is_active,
            "userName": info.user_name or None,
        }

    @log_operation
    async def add_eligible_user(self, address: Any) -> dict[str, Any]:
        """
        Add a user to the eligible list.

        The user must be registered, activated and have at least
        MIN_REFERRALS_FOR_ELIGIBILITY direct referrals. Already eligible
        users are reported without sending a transaction.

        Returns:
            {"message": ..., "data": {...}}
        """
        valid_address = require_wallet_address(address)
        self.logger.info(f"Adding eligible user: {mask_address(valid_address)}")

        info = await self._registered_user(valid_address)

        if not info.is_active:
            raise ValidationError("User account is not activated")

        min_referrals = self.settings.min_referrals_for_eligibility
        if info.direct_referrals < min_referrals:
            raise ValidationError(
                f"User must have at least {min_referrals} direct referrals "
                f"(current: {info.direct_referrals})"
            )

        data: dict[str, Any] = {
            "address": valid_address,
            "userId": str(info.user_id),
            "userName": info.user_name or None,
            "directReferrals": info.direct_referrals,
        }

        if await self.gateway.is_eligible(valid_address):
            data["alreadyEligible"] = True
            return {"message": "User is already in the eligible list", "data": data}

        tx = await self.gateway.add_eligible_user(valid_address)
        data["transaction"] = tx.to_dict()
        return {"message": "User successfully added to eligible list", "data": data}

    @log_operation
    async def remove_eligible_user(self, address: Any) -> dict[str, Any]:
        """
        Remove a user from the eligible list.

        Raises:
            NotFoundError: User is not in the eligible list
        """
        valid_address = require_wallet_address(address)
        self.logger.info(f"Removing eligible user: {mask_address(valid_address)}")

        if not await self.gateway.is_eligible(valid_address):
            raise NotFoundError("User is not in the eligible list")

        info = await self.gateway.get_user_info(valid_address)
        tx = await self.gateway.remove_eligible_user(valid_address)

        return {
            "message": "User successfully removed from eligible list",
            "data": {
                "address": valid_address,
                "userId": str(info.user_id),
                "userName": info.user_name or None,
                "transaction": tx.to_dict(),
            },
        }

    @log_operation
    async def request_eligibility(self, address: Any) -> dict[str, Any]:
        """
        Self-service eligibility request from the dashboard.

        Raises:
            ValidationError: Missing address or already eligible
        """
        if not address:
            raise ValidationError("Address is required", "address")

        valid_address = require_wallet_address(address)
        if await self.gateway.is_eligible(valid_address):
            raise ValidationError("User is already in the eligible list")

        result = await self.add_eligible_user(valid_address)
        return {"message": "Successfully added to eligible list", "data": result["data"]}
