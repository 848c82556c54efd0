"""
Global Error Handler Middleware.

Catches exceptions raised by handlers and renders them as JSON:
{"success": false, "error": ..., "type": ...}.
Never leaks stack traces to clients.
"""

from collections.abc import Awaitable, Callable
from typing import Any

from aiohttp import web
from loguru import logger

from api.app_keys import REQUEST_ID_KEY
from app.utils.error_messages import describe_error, parse_blockchain_error
from app.utils.exceptions import ApiError, BlockchainError, is_blockchain_exception


Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]

SERVER_ERROR_MESSAGE = "Internal server error. Please try again later."


def blockchain_error_body(error: BaseException) -> dict[str, Any]:
    """JSON body for chain failures: friendly message plus client hints."""
    body: dict[str, Any] = {
        "success": False,
        "error": parse_blockchain_error(error),
        "type": "blockchain_error",
        "details": describe_error(error).to_dict(),
    }
    tx_hash = getattr(error, "tx_hash", None)
    if tx_hash:
        body["txHash"] = tx_hash
    return body


def render_error(error: BaseException) -> web.Response:
    """Map an exception to its JSON error response."""
    if isinstance(error, BlockchainError):
        return web.json_response(blockchain_error_body(error), status=error.status_code)

    if isinstance(error, ApiError):
        return web.json_response(error.to_dict(), status=error.status_code)

    if is_blockchain_exception(error):
        return web.json_response(blockchain_error_body(error), status=500)

    return web.json_response(
        {"success": False, "error": SERVER_ERROR_MESSAGE, "type": "server_error"},
        status=500,
    )


@web.middleware
async def error_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    """Execute handler and convert failures to JSON responses."""
    try:
        return await handler(request)
    except web.HTTPException as e:
        if e.status < 400:
            raise
        return web.json_response(
            {
                "success": False,
                "error": e.reason,
                "type": "not_found_error" if e.status == 404 else "http_error",
            },
            status=e.status,
        )
    except ApiError as e:
        level = "ERROR" if e.status_code >= 500 else "WARNING"
        logger.log(
            level,
            f"[{request.get(REQUEST_ID_KEY)}] {request.method} {request.path} failed: "
            f"{e.error_type} ({e.status_code}): {e.message}",
        )
        return render_error(e)
    except Exception as e:
        logger.exception(
            f"[{request.get(REQUEST_ID_KEY)}] Unhandled exception on "
            f"{request.method} {request.path}: {e}"
        )
        return render_error(e)
