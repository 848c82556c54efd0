"""User onboarding flow handler."""

from aiohttp import web

from api.app_keys import GATEWAY_KEY
from api.handlers.common import require_api_key, success
from app.services.user_flow import describe_user_flow
from app.validators.unified import require_wallet_address


@require_api_key
async def user_flow(request: web.Request) -> web.Response:
    """
    Onboarding state of a wallet.

    Returns state, next route, progress percentage and the banner message.
    """
    address = require_wallet_address(request.match_info["address"])
    user_info = await request.app[GATEWAY_KEY].get_user_info(address)
    return success(describe_user_flow(address, user_info))
