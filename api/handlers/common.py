"""
Common handler helpers.

JSON response shortcuts, tolerant body parsing and the API key guard.
"""

import functools
import hmac
from collections.abc import Awaitable, Callable
from typing import Any

from aiohttp import web
from loguru import logger

from api.app_keys import SETTINGS_KEY
from app.config.constants import API_KEY_HEADER, API_KEY_QUERY_PARAM
from app.utils.exceptions import AuthorizationError


Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


def success(data: Any = None, message: str | None = None, status: int = 200) -> web.Response:
    """Standard success envelope: {"success": true, ["message"], "data"}."""
    body: dict[str, Any] = {"success": True}
    if message is not None:
        body["message"] = message
    body["data"] = data
    return web.json_response(body, status=status)


async def read_json_body(request: web.Request) -> dict[str, Any]:
    """
    Parse the request body as a JSON object.

    Missing, malformed or non-object bodies are treated as ``{}``.
    """
    if not request.body_exists:
        return {}
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def require_api_key(handler: Handler) -> Handler:
    """
    Guard a handler with the configured API key.

    No-op when API_KEY is not set. Otherwise the key must be sent in the
    X-API-Key header or the ``apiKey`` query parameter.
    """

    @functools.wraps(handler)
    async def wrapper(request: web.Request) -> web.StreamResponse:
        expected = request.app[SETTINGS_KEY].api_key
        if expected:
            provided = request.headers.get(API_KEY_HEADER) or request.query.get(
                API_KEY_QUERY_PARAM
            )
            if not provided or not hmac.compare_digest(provided, expected):
                raise AuthorizationError("Invalid or missing API key")
            logger.debug("API key authenticated")
        return await handler(request)

    return wrapper
