"""
Request log.

JSON-lines log of every HTTP request and response, and queries over it.
"""

from .reader import RequestLogReader
from .writer import RequestLogWriter, generate_request_id


__all__ = ["RequestLogReader", "RequestLogWriter", "generate_request_id"]
