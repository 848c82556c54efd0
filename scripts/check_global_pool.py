#!/usr/bin/env python3
"""Print global pool statistics."""

import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from loguru import logger  # noqa: E402

from app.config.settings import get_settings  # noqa: E402
from app.services.blockchain import init_contract_gateway  # noqa: E402
from app.services.global_pool_service import GlobalPoolService  # noqa: E402

# Configure logger for script
logger.remove()
logger.add(sys.stderr, level="INFO")


async def check() -> None:
    settings = get_settings()
    gateway = init_contract_gateway(settings)
    try:
        stats = await GlobalPoolService(gateway, settings).get_stats()
    finally:
        gateway.close()

    logger.info("Global Pool Statistics:")
    logger.info(f"  Total allocated: {stats['totalAllocated']['usdt']} USDT")
    logger.info(f"  Total claimed:   {stats['totalClaimed']['usdt']} USDT")
    logger.info(f"  Total pending:   {stats['totalPending']['usdt']} USDT")
    logger.info(f"  Current balance: {stats['currentBalance']['usdt']} USDT")
    logger.info(f"  Eligible count:  {stats['eligibleCount']}")
    logger.info(f"  Eligible users:  {stats['eligibleUsers']}")


if __name__ == "__main__":
    asyncio.run(check())
