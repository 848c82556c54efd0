"""Eligible users handlers."""

from aiohttp import web

from api.app_keys import ELIGIBILITY_SERVICE_KEY
from api.handlers.common import read_json_body, require_api_key, success


@require_api_key
async def list_eligible_users(request: web.Request) -> web.Response:
    service = request.app[ELIGIBILITY_SERVICE_KEY]
    return success(await service.list_eligible_users())


@require_api_key
async def check_eligibility(request: web.Request) -> web.Response:
    service = request.app[ELIGIBILITY_SERVICE_KEY]
    return success(await service.check_eligibility(request.match_info["address"]))


@require_api_key
async def add_eligible_user(request: web.Request) -> web.Response:
    """POST {"address": "0x..."}"""
    body = await read_json_body(request)
    result = await request.app[ELIGIBILITY_SERVICE_KEY].add_eligible_user(
        body.get("address")
    )
    return success(result["data"], message=result["message"])


@require_api_key
async def remove_eligible_user(request: web.Request) -> web.Response:
    """POST {"address": "0x..."}"""
    body = await read_json_body(request)
    result = await request.app[ELIGIBILITY_SERVICE_KEY].remove_eligible_user(
        body.get("address")
    )
    return success(result["data"], message=result["message"])


@require_api_key
async def request_eligibility(request: web.Request) -> web.Response:
    """Self-service request from the dashboard: POST {"address": "0x..."}"""
    body = await read_json_body(request)
    result = await request.app[ELIGIBILITY_SERVICE_KEY].request_eligibility(
        body.get("address")
    )
    return success(result["data"], message=result["message"])
