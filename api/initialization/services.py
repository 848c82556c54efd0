"""
API Initialization - Services Module.

Module: services.py
Builds the domain services around a contract gateway and stores them on
the application.
"""

from aiohttp import web
from loguru import logger

from api.app_keys import (
    ELIGIBILITY_SERVICE_KEY,
    GATEWAY_KEY,
    GLOBAL_POOL_SERVICE_KEY,
    REQUEST_LOG_READER_KEY,
    SETTINGS_KEY,
    SYSTEM_SERVICE_KEY,
)
from app.config.settings import Settings
from app.services.blockchain.contract_gateway import ContractGateway
from app.services.eligibility_service import EligibilityService
from app.services.global_pool_service import GlobalPoolService
from app.services.request_log import RequestLogReader
from app.services.system_service import SystemService


def initialize_all_services(
    app: web.Application,
    settings: Settings,
    gateway: ContractGateway,
) -> None:
    """
    Attach settings, gateway, services and the request log reader to the app.

    Args:
        app: Application instance
        settings: Application settings
        gateway: Contract gateway shared by all services
    """
    app[SETTINGS_KEY] = settings
    app[GATEWAY_KEY] = gateway
    app[ELIGIBILITY_SERVICE_KEY] = EligibilityService(gateway, settings)
    app[GLOBAL_POOL_SERVICE_KEY] = GlobalPoolService(gateway, settings)
    app[SYSTEM_SERVICE_KEY] = SystemService(gateway, settings)
    app[REQUEST_LOG_READER_KEY] = RequestLogReader(settings.log_dir)

    logger.info("Services initialized successfully")
