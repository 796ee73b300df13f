"""Loguru structured logging configuration.

Provides human-readable and JSON-formatted logging with a configurable level.
When a ``log_dir`` is provided, a rotating application log and a separate
audit log (records bound with ``audit=True``) are written there.
"""

import sys
from pathlib import Path

from loguru import logger

_LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {name}:{function}:{line} | {message}"
_AUDIT_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {message} | {extra}"

audit_logger = logger.bind(audit=True)


def _is_audit(record: dict) -> bool:
    return bool(record["extra"].get("audit", False))


def mask_phone(phone: str | None) -> str:
    """Mask a phone number down to its last four digits for log output."""
    if not phone:
        return "<none>"
    digits = "".join(ch for ch in phone if ch.isdigit())
    if len(digits) <= 4:
        return "****"
    return "*" * (len(digits) - 4) + digits[-4:]


def setup_logging(log_level: str = "INFO", log_dir: str | None = None) -> None:
    """Configure Loguru sinks.

    Args:
        log_level: Minimum log level to emit.
        log_dir: Optional directory for log files.  When set, a rotating
            application log and an audit log are added (rotated every
            24 hours, retained 7 days).
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level.upper(),
        format=_LOG_FORMAT,
        serialize=False,
    )
    logger.add(
        sys.stderr,
        level=log_level.upper(),
        serialize=True,
        filter=lambda record: record["extra"].get("json_output", False),
    )

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path / "ballot-api.log",
            level=log_level.upper(),
            format=_LOG_FORMAT,
            rotation="24h",
            retention="7 days",
        )
        logger.add(
            log_path / "audit.log",
            level="INFO",
            format=_AUDIT_FORMAT,
            filter=_is_audit,
            rotation="24h",
            retention="7 days",
        )
