"""
HTTP application factory.

Middleware order (outermost first):
1. Security headers
2. Request logging (request id, requests.log)
3. Rate limiting
4. Error rendering
"""

from aiohttp import web

from api.initialization.routes import register_routes, setup_cors
from api.initialization.services import initialize_all_services
from api.middlewares import (
    RateLimiter,
    error_middleware,
    rate_limit_middleware,
    request_logging_middleware,
    security_headers_middleware,
)
from app.config.settings import Settings
from app.services.blockchain.contract_gateway import ContractGateway
from app.services.request_log import RequestLogWriter


def create_app(
    settings: Settings,
    gateway: ContractGateway,
    rate_limiter: RateLimiter | None = None,
) -> web.Application:
    """
    Build the aiohttp application.

    Args:
        settings: Application settings
        gateway: Contract gateway used by all services
        rate_limiter: Limiter to use (built from settings if None)

    Returns:
        Configured application, ready for web.run_app or a test server
    """
    limiter = rate_limiter or RateLimiter(
        window_seconds=settings.rate_limit_window_seconds,
        max_requests=settings.rate_limit_max_requests,
    )
    writer = RequestLogWriter()

    app = web.Application(
        middlewares=[
            security_headers_middleware,
            request_logging_middleware(writer),
            rate_limit_middleware(limiter),
            error_middleware,
        ]
    )

    initialize_all_services(app, settings, gateway)
    register_routes(app, settings)
    setup_cors(app, settings)

    return app
