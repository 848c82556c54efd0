#!/usr/bin/env python3
"""
Add a user to the eligible list from the command line.

Usage:
    python scripts/add_eligible.py <address> [--dry-run]

Walks the address through the same checks as the API (registered,
activated, enough direct referrals, not already eligible) and sends
addEligibleUser. With --dry-run it stops after the checks.
"""

import argparse
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from loguru import logger  # noqa: E402

from app.config.settings import get_settings  # noqa: E402
from app.services.blockchain import init_contract_gateway  # noqa: E402
from app.utils.error_messages import describe_error  # noqa: E402
from app.utils.exceptions import ValidationError  # noqa: E402
from app.validators.unified import require_wallet_address  # noqa: E402

# Configure logger for script
logger.remove()
logger.add(sys.stderr, level="INFO")


async def add_eligible(address: str, dry_run: bool) -> int:
    """
    Check and add one address.

    Returns:
        Process exit code
    """
    settings = get_settings()
    gateway = init_contract_gateway(settings)

    try:
        logger.info(f"Target address: {address}")

        logger.info("Checking user info...")
        info = await gateway.get_user_info(address)
        logger.info(f"   User ID: {info.user_id}")
        logger.info(f"   Username: {info.user_name or 'Not set'}")
        logger.info(f"   Direct Referrals: {info.direct_referrals}")
        logger.info(f"   Is Active: {info.is_active}")

        if not info.is_registered:
            logger.error("User is not registered")
            return 1
        if not info.is_active:
            logger.error("User is not activated")
            return 1
        min_referrals = settings.min_referrals_for_eligibility
        if info.direct_referrals < min_referrals:
            logger.error(
                f"User needs {min_referrals} referrals (has {info.direct_referrals})"
            )
            return 1
        logger.success("User meets all requirements")

        logger.info("Checking if already eligible...")
        if await gateway.is_eligible(address):
            logger.info("User is already in the eligible list")
            return 0

        if dry_run:
            logger.info("Dry run: not sending the transaction")
            return 0

        logger.info("Sending transaction...")
        tx = await gateway.add_eligible_user(address)
        logger.info(f"   TX Hash: {tx.tx_hash}")
        logger.info(f"   Confirmed in block {tx.block_number}")
        logger.info(f"   Gas used: {tx.gas_used}")
        logger.success("User added to eligible list")
        return 0

    except Exception as e:
        details = describe_error(e)
        logger.error(f"FAILED: {details.title}: {details.message}")
        logger.debug(f"Error details: {e!r}")
        return 1
    finally:
        gateway.close()


def main() -> int:
    parser = argparse.ArgumentParser(description="Add a user to the eligible list")
    parser.add_argument("address", help="Wallet address (0x...)")
    parser.add_argument(
        "--dry-run", action="store_true", help="Run the checks without sending a transaction"
    )
    args = parser.parse_args()

    try:
        address = require_wallet_address(args.address)
    except ValidationError as e:
        logger.error(e.message)
        return 1

    return asyncio.run(add_eligible(address, args.dry_run))


if __name__ == "__main__":
    sys.exit(main())
