"""Global pool handlers."""

from aiohttp import web

from api.app_keys import GLOBAL_POOL_SERVICE_KEY
from api.handlers.common import require_api_key, success


@require_api_key
async def global_pool_stats(request: web.Request) -> web.Response:
    return success(await request.app[GLOBAL_POOL_SERVICE_KEY].get_stats())


@require_api_key
async def distribute_global_pool(request: web.Request) -> web.Response:
    result = await request.app[GLOBAL_POOL_SERVICE_KEY].distribute()
    return success(result["data"], message=result["message"])
