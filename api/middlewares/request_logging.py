"""
Request logging middleware.

Assigns a request id, writes REQUEST/RESPONSE records to requests.log and
logs a one-line summary per request.
"""

import json
import time
from collections.abc import Awaitable, Callable
from typing import Any

from aiohttp import web
from loguru import logger

from api.app_keys import REQUEST_ID_KEY
from app.config.constants import REQUEST_ID_HEADER
from app.services.request_log import RequestLogWriter, generate_request_id


Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


async def _request_body(request: web.Request) -> Any:
    """Parsed JSON body for logging, or None. The body stays readable."""
    if not request.body_exists or request.content_type != "application/json":
        return None
    try:
        return await request.json()
    except ValueError:
        return None


def _response_body(response: web.StreamResponse) -> Any:
    if not isinstance(response, web.Response) or response.body is None:
        return None
    if response.content_type != "application/json":
        return None
    try:
        return json.loads(response.text)
    except (TypeError, ValueError):
        return None


def request_logging_middleware(writer: RequestLogWriter) -> Callable:
    """Build the middleware around a request log writer."""

    @web.middleware
    async def middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
        start = time.perf_counter()
        request_id = generate_request_id()
        request[REQUEST_ID_KEY] = request_id

        writer.log_request(
            writer.build_request_record(
                request_id=request_id,
                method=request.method,
                url=request.path_qs,
                path=request.path,
                query=dict(request.query),
                headers=request.headers,
                body=await _request_body(request),
                ip=request.remote,
            )
        )

        response = await handler(request)
        duration_ms = int((time.perf_counter() - start) * 1000)
        response.headers[REQUEST_ID_HEADER] = request_id

        writer.log_response(
            writer.build_response_record(
                request_id=request_id,
                method=request.method,
                url=request.path_qs,
                path=request.path,
                status_code=response.status,
                status_message=response.reason,
                duration_ms=duration_ms,
                body=_response_body(response),
                content_type=response.headers.get("Content-Type"),
            )
        )

        summary = (
            f"{request.method} {request.path} - {response.status} ({duration_ms}ms)"
        )
        if response.status >= 400:
            logger.warning(summary)
        else:
            logger.info(summary)

        return response

    return middleware
