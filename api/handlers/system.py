"""System handlers: root descriptor, health, status and contract stats."""

from aiohttp import web

from api.app_keys import SETTINGS_KEY, SYSTEM_SERVICE_KEY
from api.handlers.common import require_api_key, success
from app.config.constants import APP_DESCRIPTION, APP_NAME, APP_VERSION


async def root(request: web.Request) -> web.Response:
    """Service descriptor with the main endpoint map."""
    prefix = request.app[SETTINGS_KEY].api_prefix
    return web.json_response(
        {
            "name": APP_NAME,
            "version": APP_VERSION,
            "description": APP_DESCRIPTION,
            "endpoints": {
                "health": f"{prefix}/health",
                "status": f"{prefix}/status",
                "stats": f"{prefix}/stats",
                "eligibleUsers": f"{prefix}/eligible-users",
                "globalPool": f"{prefix}/global-pool/stats",
                "userFlow": f"{prefix}/user-flow/{{address}}",
                "logs": f"{prefix}/logs/recent",
            },
            "documentation": "See README.md for full API documentation",
        }
    )


async def health(request: web.Request) -> web.Response:
    return web.json_response(request.app[SYSTEM_SERVICE_KEY].health())


async def status(request: web.Request) -> web.Response:
    """System status; 503 when the blockchain connection check fails."""
    include_providers = request.query.get("providers") in ("1", "true")
    payload, status_code = await request.app[SYSTEM_SERVICE_KEY].status(
        include_providers=include_providers
    )
    return web.json_response(payload, status=status_code)


@require_api_key
async def contract_stats(request: web.Request) -> web.Response:
    return success(await request.app[SYSTEM_SERVICE_KEY].contract_stats())
