"""
Middlewares.

aiohttp middlewares for request processing.
"""

from api.middlewares.error_handler import error_middleware
from api.middlewares.rate_limit import RateLimiter, rate_limit_middleware
from api.middlewares.request_logging import request_logging_middleware
from api.middlewares.security_headers import security_headers_middleware


__all__ = [
    "RateLimiter",
    "error_middleware",
    "rate_limit_middleware",
    "request_logging_middleware",
    "security_headers_middleware",
]
