"""
Request log handlers.

Expose RequestLogReader queries. All routes accept ``?limit=N``
(default 50); a non-numeric limit falls back to the default.
"""

from aiohttp import web
from loguru import logger

from api.app_keys import REQUEST_LOG_READER_KEY
from api.handlers.common import require_api_key, success
from app.utils.exceptions import NotFoundError
from app.validators.unified import parse_limit


@require_api_key
async def recent_logs(request: web.Request) -> web.Response:
    limit = parse_limit(request.query.get("limit"))
    logger.info(f"Fetching recent {limit} request logs")

    requests = request.app[REQUEST_LOG_READER_KEY].recent(limit)
    return success({"requests": requests, "count": len(requests)})


@require_api_key
async def failed_logs(request: web.Request) -> web.Response:
    limit = parse_limit(request.query.get("limit"))
    logger.info(f"Fetching recent {limit} failed request logs")

    requests = request.app[REQUEST_LOG_READER_KEY].failed(limit)
    return success({"requests": requests, "count": len(requests)})


@require_api_key
async def log_stats(request: web.Request) -> web.Response:
    return success(request.app[REQUEST_LOG_READER_KEY].stats())


@require_api_key
async def log_by_id(request: web.Request) -> web.Response:
    request_id = request.match_info["request_id"]
    logger.info(f"Fetching log for request ID: {request_id}")

    log = request.app[REQUEST_LOG_READER_KEY].by_id(request_id)
    if log["request"] is None and log["response"] is None:
        raise NotFoundError("Request log not found")
    return success(log)


@require_api_key
async def logs_by_endpoint(request: web.Request) -> web.Response:
    endpoint = request.match_info["endpoint"]
    limit = parse_limit(request.query.get("limit"))
    logger.info(f"Fetching logs for endpoint: {endpoint}")

    requests = request.app[REQUEST_LOG_READER_KEY].by_endpoint(endpoint, limit)
    return success({"endpoint": endpoint, "requests": requests, "count": len(requests)})
