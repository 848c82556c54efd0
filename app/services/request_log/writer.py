"""
Request log writer.

Builds REQUEST/RESPONSE records for every HTTP exchange and hands them to
the loguru requests.log sink as single-line JSON.
"""

import json
import secrets
import time
from typing import Any

from loguru import logger

from app.services.base_service import utc_now_iso
from app.utils.security import sanitize_body


_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def generate_request_id() -> str:
    """
    Request ID of the form ``<epoch ms>-<9 base36 chars>``.

    Examples:
        >>> generate_request_id()  # doctest: +SKIP
        '1718000000000-k3j9x0a1b'
    """
    suffix = "".join(secrets.choice(_BASE36) for _ in range(9))
    return f"{int(time.time() * 1000)}-{suffix}"


class RequestLogWriter:
    """
    Writes request/response records to requests.log.

    Records are bound with ``request_log=True`` so only the requests sink
    picks them up; the payload is pre-serialised JSON.
    """

    def __init__(self) -> None:
        self._logger = logger.bind(request_log=True)

    def _emit(self, record: dict[str, Any], level: str = "INFO") -> None:
        payload = json.dumps(
            {k: v for k, v in record.items() if v is not None},
            default=str,
            ensure_ascii=False,
        )
        self._logger.bind(payload=payload).log(level, record["type"])

    def build_request_record(
        self,
        request_id: str,
        method: str,
        url: str,
        path: str,
        query: dict[str, str],
        headers: dict[str, str],
        body: Any,
        ip: str | None,
    ) -> dict[str, Any]:
        """
        Build a REQUEST record.

        Only a few headers are kept; ``x-api-key`` is reduced to ``***``
        and sensitive body fields are redacted.
        """
        user_agent = headers.get("User-Agent") or headers.get("user-agent")
        api_key = headers.get("X-API-Key") or headers.get("x-api-key")
        return {
            "requestId": request_id,
            "timestamp": utc_now_iso(),
            "type": "REQUEST",
            "method": method,
            "url": url,
            "path": path,
            "query": dict(query),
            "headers": {
                k: v
                for k, v in {
                    "content-type": headers.get("Content-Type")
                    or headers.get("content-type"),
                    "user-agent": user_agent,
                    "x-api-key": "***" if api_key else None,
                    "origin": headers.get("Origin") or headers.get("origin"),
                }.items()
                if v is not None
            },
            "body": sanitize_body(body) if body else None,
            "ip": ip,
            "userAgent": user_agent,
        }

    def build_response_record(
        self,
        request_id: str,
        method: str,
        url: str,
        path: str,
        status_code: int,
        status_message: str,
        duration_ms: int,
        body: Any = None,
        content_type: str | None = None,
    ) -> dict[str, Any]:
        """Build a RESPONSE record with status and duration."""
        return {
            "requestId": request_id,
            "timestamp": utc_now_iso(),
            "type": "RESPONSE",
            "method": method,
            "url": url,
            "path": path,
            "statusCode": status_code,
            "statusMessage": status_message,
            "duration": f"{duration_ms}ms",
            "durationMs": duration_ms,
            "body": sanitize_body(body) if body is not None else None,
            "headers": {"content-type": content_type} if content_type else {},
        }

    def log_request(self, record: dict[str, Any]) -> None:
        self._emit(record)

    def log_response(self, record: dict[str, Any]) -> None:
        level = "WARNING" if record["statusCode"] >= 400 else "INFO"
        self._emit(record, level)
