#!/usr/bin/env python3
"""
Request log viewer.

Usage:
    python scripts/log_viewer.py recent [limit]   - Show recent requests
    python scripts/log_viewer.py failed           - Show failed requests
    python scripts/log_viewer.py stats            - Show request statistics
    python scripts/log_viewer.py clear [days]     - Clear logs older than N days
"""

import argparse
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from loguru import logger  # noqa: E402

from app.config.constants import LOG_RETENTION_DAYS  # noqa: E402
from app.services.request_log import RequestLogReader  # noqa: E402

# Configure logger for script
logger.remove()
logger.add(sys.stderr, level="INFO", format="{message}")


def show_recent(reader: RequestLogReader, limit: int) -> None:
    logger.info(f"Recent {limit} Requests:\n")
    for req in reader.recent(limit):
        logger.info(f"[{req.get('timestamp')}] {req.get('method')} {req.get('path')}")
        if req.get("body"):
            logger.info(f"   Body: {json.dumps(req['body'])}")


def show_failed(reader: RequestLogReader, limit: int) -> None:
    logger.info("Recent Failed Requests:\n")
    for res in reader.failed(limit):
        logger.info(
            f"[{res.get('timestamp')}] {res.get('method')} {res.get('path')} "
            f"- {res.get('statusCode')}"
        )
        if res.get("body"):
            logger.info(f"   Response: {json.dumps(res['body'])}")


def show_stats(reader: RequestLogReader) -> None:
    stats = reader.stats()
    total = stats["total"]

    def pct(n: int) -> int:
        return round(n / total * 100) if total else 0

    logger.info("Request Statistics:\n")
    logger.info(f"Total Requests: {total}")
    logger.info(f"Successful: {stats['successful']} ({pct(stats['successful'])}%)")
    logger.info(f"Failed: {stats['failed']} ({pct(stats['failed'])}%)")
    logger.info(f"Average Duration: {stats['averageDuration']}ms")
    logger.info("\nEndpoints:")
    for endpoint, data in stats["endpoints"].items():
        logger.info(f"  {endpoint}: {data['count']} requests ({data['failed']} failed)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="View the API request log")
    parser.add_argument("--log-dir", default="logs", help="Log directory (default: logs)")
    sub = parser.add_subparsers(dest="command", required=True)

    recent = sub.add_parser("recent", help="Show recent requests")
    recent.add_argument("limit", nargs="?", type=int, default=20)

    failed = sub.add_parser("failed", help="Show failed requests")
    failed.add_argument("limit", nargs="?", type=int, default=20)

    sub.add_parser("stats", help="Show request statistics")

    clear = sub.add_parser("clear", help="Clear logs older than N days")
    clear.add_argument("days", nargs="?", type=int, default=LOG_RETENTION_DAYS)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    reader = RequestLogReader(args.log_dir)

    if args.command == "recent":
        show_recent(reader, args.limit)
    elif args.command == "failed":
        show_failed(reader, args.limit)
    elif args.command == "stats":
        show_stats(reader)
    elif args.command == "clear":
        deleted = reader.clear_old_logs(args.days)
        if not deleted:
            logger.info(f"No log files older than {args.days} days")
    return 0


if __name__ == "__main__":
    sys.exit(main())
