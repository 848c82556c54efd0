"""
API main entry point.

Initializes logging, settings and the contract gateway, checks the
blockchain connection and serves the HTTP API with aiohttp.
"""

import asyncio
import sys
import warnings
from pathlib import Path


# eth_utils warns about networks without a registered ChainId on import
warnings.filterwarnings(
    "ignore",
    message=".*does not have a valid ChainId.*",
    category=UserWarning,
)

from aiohttp import web  # noqa: E402
from loguru import logger  # noqa: E402
from pydantic import ValidationError as SettingsValidationError  # noqa: E402


# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from api.server import create_app  # noqa: E402
from app.config.settings import Settings, get_settings  # noqa: E402
from app.services.blockchain import init_contract_gateway  # noqa: E402
from app.services.blockchain.types import ConnectionReport  # noqa: E402
from app.utils.exceptions import SecurityError  # noqa: E402
from app.utils.logging_setup import setup_logging  # noqa: E402


def log_startup_banner(settings: Settings, report: ConnectionReport) -> None:
    """Log where the server listens and who the manager wallet is."""
    line = "=" * 52
    logger.info(line)
    logger.info("USDT Rain Backend Server")
    logger.info(line)
    logger.info(f"Server running on: http://localhost:{settings.port}")
    logger.info(f"API endpoint: http://localhost:{settings.port}{settings.api_prefix}")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Network: {settings.network_name} (Chain ID: {settings.chain_id})")
    logger.info(f"Contract: {settings.contract_address}")
    logger.info(f"Manager: {report.manager_address}")
    logger.info(
        f"Manager Status: {'Authorized' if report.is_manager else 'Not Authorized'}"
    )
    logger.info(line)

    if not report.is_manager:
        logger.warning("Your wallet is not set as the contract manager!")
        logger.warning("You may not have permission to add/remove eligible users.")


def run() -> None:
    """Start the server; exits with code 1 if the blockchain is unreachable."""
    try:
        settings = get_settings()
    except SettingsValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    setup_logging(settings)

    try:
        gateway = init_contract_gateway(settings)
    except SecurityError as e:
        logger.error(f"Failed to load manager wallet: {e}")
        sys.exit(1)

    logger.info("Testing blockchain connection...")
    report = asyncio.run(gateway.test_connection())
    if not report.success:
        logger.error(
            "Failed to connect to blockchain. Please check your configuration."
        )
        gateway.close()
        sys.exit(1)
    logger.success("Blockchain connection successful!")

    app = create_app(settings, gateway)

    async def _close_gateway(_: web.Application) -> None:
        gateway.close()

    app.on_cleanup.append(_close_gateway)

    log_startup_banner(settings, report)
    logger.info("Server started successfully")
    web.run_app(app, host=settings.host, port=settings.port, print=None)


if __name__ == "__main__":
    try:
        run()
    except KeyboardInterrupt:
        logger.info("Server stopped by user (KeyboardInterrupt)")
    except Exception as e:
        logger.exception(f"Server crashed: {e}")
        sys.exit(1)
