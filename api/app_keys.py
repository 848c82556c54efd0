"""Typed keys for objects stored on the aiohttp application and requests."""

from aiohttp import web

from app.config.settings import Settings
from app.services.blockchain.contract_gateway import ContractGateway
from app.services.eligibility_service import EligibilityService
from app.services.global_pool_service import GlobalPoolService
from app.services.request_log import RequestLogReader
from app.services.system_service import SystemService


SETTINGS_KEY = web.AppKey("settings", Settings)
GATEWAY_KEY = web.AppKey("gateway", ContractGateway)
ELIGIBILITY_SERVICE_KEY = web.AppKey("eligibility_service", EligibilityService)
GLOBAL_POOL_SERVICE_KEY = web.AppKey("global_pool_service", GlobalPoolService)
SYSTEM_SERVICE_KEY = web.AppKey("system_service", SystemService)
REQUEST_LOG_READER_KEY = web.AppKey("request_log_reader", RequestLogReader)

REQUEST_ID_KEY = web.RequestKey("request_id", str)
