"""
Logging configuration for the platform CLI.

Console diagnostics go to stderr (WARNING by default, DEBUG with
--verbose). When PLATFORM_LOG_DIR is set, a rotating JSON-lines log is
written there as well.
"""

import json
import logging
import logging.handlers
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, TextIO

LOGGER_NAMES = ("platform_manager_client", "platform_manager_sdk")


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if hasattr(record, "command"):
            log_obj["command"] = record.command

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_obj)


class HumanReadableFormatter(logging.Formatter):
    """Human-readable formatter for console logs."""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


def setup_logging(
    verbose: bool = False,
    log_dir: Optional[str] = None,
    stream: Optional[TextIO] = None,
    max_bytes: int = 5 * 1024 * 1024,  # 5MB
    backup_count: int = 3,
) -> None:
    """
    Configure logging for the CLI packages.

    Args:
        verbose: Log DEBUG to the console instead of WARNING
        log_dir: Directory for the rotating JSON log file (optional)
        stream: Console stream (default: sys.stderr)
        max_bytes: Max size per log file before rotation
        backup_count: Number of backup files to keep
    """
    console_handler = logging.StreamHandler(stream or sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console_handler.setFormatter(HumanReadableFormatter())

    file_handler = None
    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_path / "platform-cli.log", maxBytes=max_bytes, backupCount=backup_count
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(StructuredFormatter())

    for name in LOGGER_NAMES:
        package_logger = logging.getLogger(name)
        package_logger.setLevel(logging.DEBUG)
        for old_handler in package_logger.handlers:
            old_handler.close()
        package_logger.handlers.clear()
        package_logger.addHandler(console_handler)
        if file_handler is not None:
            package_logger.addHandler(file_handler)
        package_logger.propagate = False

    # Reduce noise from the HTTP stack
    logging.getLogger("urllib3").setLevel(logging.WARNING)
