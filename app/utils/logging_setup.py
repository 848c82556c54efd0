"""
Logging setup.

Configures loguru sinks for the API process:
- stderr (skipped in production)
- logs/combined.log: JSON-serialised records at LOG_LEVEL and above
- logs/error.log: ERROR and above
- logs/requests.log: one JSON object per line, fed only by records bound
  with ``request_log=True`` (see RequestLogWriter)
"""

import sys
from pathlib import Path
from typing import Any

from loguru import logger

from app.config.constants import (
    COMBINED_LOG_FILE,
    COMBINED_LOG_RETENTION,
    COMBINED_LOG_ROTATION,
    ERROR_LOG_FILE,
    REQUESTS_LOG_FILE,
    REQUESTS_LOG_RETENTION,
    REQUESTS_LOG_ROTATION,
)
from app.config.settings import Settings


CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def is_request_record(record: dict[str, Any]) -> bool:
    """True for records destined for requests.log."""
    return bool(record["extra"].get("request_log"))


def is_app_record(record: dict[str, Any]) -> bool:
    return not is_request_record(record)


def setup_logging(settings: Settings) -> Path:
    """
    Configure logger sinks with file rotation.

    Args:
        settings: Application settings (log level, log dir, environment)

    Returns:
        Log directory in use
    """
    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    logger.remove()

    if not settings.is_production:
        logger.add(
            sys.stderr,
            level=settings.log_level,
            format=CONSOLE_FORMAT,
            filter=is_app_record,
        )

    logger.add(
        log_dir / COMBINED_LOG_FILE,
        level=settings.log_level,
        rotation=COMBINED_LOG_ROTATION,
        retention=COMBINED_LOG_RETENTION,
        serialize=True,
        filter=is_app_record,
        encoding="utf-8",
    )

    logger.add(
        log_dir / ERROR_LOG_FILE,
        level="ERROR",
        rotation=COMBINED_LOG_ROTATION,
        retention=COMBINED_LOG_RETENTION,
        filter=is_app_record,
        encoding="utf-8",
    )

    logger.add(
        log_dir / REQUESTS_LOG_FILE,
        level="DEBUG",
        format="{extra[payload]}",
        rotation=REQUESTS_LOG_ROTATION,
        retention=REQUESTS_LOG_RETENTION,
        filter=is_request_record,
        encoding="utf-8",
    )

    logger.info(f"Logging configured: level={settings.log_level}, dir={log_dir}")
    return log_dir
