"""
Rate limiting middleware.

Fixed-window request counter per client IP, kept in process memory.
Windows older than the window size are purged on every request.
"""

import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from aiohttp import web
from loguru import logger

from app.config.constants import RATE_LIMIT_MAX_REQUESTS, RATE_LIMIT_WINDOW_SECONDS
from app.utils.exceptions import RateLimitError


Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


@dataclass
class _Window:
    started_at: float
    count: int = 0


class RateLimiter:
    """
    In-memory fixed-window rate limiter.

    Args:
        window_seconds: Window length
        max_requests: Requests allowed per client within one window
        clock: Time source, injectable for tests
    """

    def __init__(
        self,
        window_seconds: int = RATE_LIMIT_WINDOW_SECONDS,
        max_requests: int = RATE_LIMIT_MAX_REQUESTS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.window_seconds = window_seconds
        self.max_requests = max_requests
        self._clock = clock
        self._windows: dict[str, _Window] = {}

    def _purge(self, now: float) -> None:
        expired = [
            client_id
            for client_id, window in self._windows.items()
            if now - window.started_at > self.window_seconds
        ]
        for client_id in expired:
            del self._windows[client_id]

    def hit(self, client_id: str) -> bool:
        """
        Count a request.

        Returns:
            True if the request is allowed, False if the limit is exceeded
        """
        now = self._clock()
        self._purge(now)

        window = self._windows.get(client_id)
        if window is None:
            window = _Window(started_at=now)
            self._windows[client_id] = window

        window.count += 1
        return window.count <= self.max_requests

    def reset(self) -> None:
        self._windows.clear()


def rate_limit_middleware(limiter: RateLimiter) -> Callable:
    """Build the middleware around a limiter instance."""

    @web.middleware
    async def middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
        client_id = request.remote or "unknown"
        if not limiter.hit(client_id):
            logger.warning(f"Rate limit exceeded for IP: {client_id}")
            error = RateLimitError()
            return web.json_response(error.to_dict(), status=error.status_code)
        return await handler(request)

    return middleware
