"""
Request log reader.

Queries over the JSON-lines requests.log: recent, failed, by request id,
by endpoint, aggregate stats and cleanup of old log files.
"""

import json
import time
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from loguru import logger

from app.config.constants import (
    COMBINED_LOG_FILE,
    DEFAULT_LOG_QUERY_LIMIT,
    ERROR_LOG_FILE,
    LOG_RETENTION_DAYS,
    REQUESTS_LOG_FILE,
)


class RequestLogReader:
    """Read-side of the request log."""

    def __init__(self, log_dir: str | Path) -> None:
        self.log_dir = Path(log_dir)
        self.requests_log_path = self.log_dir / REQUESTS_LOG_FILE

    def _records(self) -> Iterator[dict[str, Any]]:
        """Yield parsed records, skipping lines that are not JSON objects."""
        if not self.requests_log_path.exists():
            return

        with self.requests_log_path.open(encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line:
                    continue
                try:
                    record = json.loads(line)
                except json.JSONDecodeError:
                    continue
                if isinstance(record, dict):
                    yield record

    @staticmethod
    def _tail(items: list[dict[str, Any]], limit: int) -> list[dict[str, Any]]:
        return items[-limit:] if limit > 0 else []

    def recent(self, limit: int = DEFAULT_LOG_QUERY_LIMIT) -> list[dict[str, Any]]:
        """Last ``limit`` REQUEST records."""
        requests = [r for r in self._records() if r.get("type") == "REQUEST"]
        return self._tail(requests, limit)

    def failed(self, limit: int = DEFAULT_LOG_QUERY_LIMIT) -> list[dict[str, Any]]:
        """Last ``limit`` RESPONSE records with status code >= 400."""
        failed = [
            r
            for r in self._records()
            if r.get("type") == "RESPONSE" and r.get("statusCode", 0) >= 400
        ]
        return self._tail(failed, limit)

    def by_id(self, request_id: str) -> dict[str, Any]:
        """
        Request/response pair for a request id.

        Returns:
            {"request": record | None, "response": record | None}
        """
        result: dict[str, Any] = {"request": None, "response": None}
        for record in self._records():
            if record.get("requestId") != request_id:
                continue
            if record.get("type") == "REQUEST":
                result["request"] = record
            elif record.get("type") == "RESPONSE":
                result["response"] = record
        return result

    def by_endpoint(
        self, endpoint: str, limit: int = DEFAULT_LOG_QUERY_LIMIT
    ) -> list[dict[str, Any]]:
        """Last ``limit`` REQUEST records whose path contains ``endpoint``."""
        requests = [
            r
            for r in self._records()
            if r.get("type") == "REQUEST" and endpoint in (r.get("path") or "")
        ]
        return self._tail(requests, limit)

    def stats(self) -> dict[str, Any]:
        """
        Aggregate RESPONSE statistics.

        Returns:
            total, successful, failed, averageDuration (rounded ms) and
            per-endpoint {"count", "failed"}
        """
        total = successful = failed = 0
        total_duration = 0
        endpoints: dict[str, dict[str, int]] = {}

        for record in self._records():
            if record.get("type") != "RESPONSE":
                continue

            total += 1
            is_failed = record.get("statusCode", 0) >= 400
            if is_failed:
                failed += 1
            else:
                successful += 1

            total_duration += record.get("durationMs") or 0

            endpoint = record.get("path") or record.get("url") or ""
            entry = endpoints.setdefault(endpoint, {"count": 0, "failed": 0})
            entry["count"] += 1
            if is_failed:
                entry["failed"] += 1

        return {
            "total": total,
            "successful": successful,
            "failed": failed,
            "averageDuration": round(total_duration / total) if total else 0,
            "endpoints": endpoints,
        }

    def clear_old_logs(self, days_to_keep: int = LOG_RETENTION_DAYS) -> list[str]:
        """
        Delete log files last modified before the cutoff.

        Returns:
            Names of deleted files
        """
        cutoff = time.time() - days_to_keep * 24 * 60 * 60
        deleted = []

        for name in (REQUESTS_LOG_FILE, COMBINED_LOG_FILE, ERROR_LOG_FILE):
            path = self.log_dir / name
            if path.exists() and path.stat().st_mtime < cutoff:
                path.unlink()
                deleted.append(name)
                logger.info(f"Deleted old log file: {name}")

        return deleted
