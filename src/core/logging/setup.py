"""Logging setup and configuration."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from core.logging.constants import (
    DEFAULT_BACKUP_COUNT,
    DEFAULT_FILE_LEVEL,
    DEFAULT_LOG_FILE,
    DEFAULT_MAX_BYTES,
    NOISY_LOGGERS,
    TEXT_FORMAT,
)
from core.logging.formatters import ConsoleFormatter, JSONFormatter


def setup_logging(
    name: str = "apt_transport_blob",
    log_file: Optional[Path] = None,
    json_format: bool = False,
    file_level: int = DEFAULT_FILE_LEVEL,
    console_level: Optional[int] = None,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    suppress_noisy: bool = True,
) -> logging.Logger:
    """
    Configure logging with a rotating file handler and optional stderr output.

    Standard output carries the method protocol, so no handler is ever
    attached to sys.stdout.

    Args:
        name: Logger name to return
        log_file: Log file path (default: /var/log/apt-transport-blob.log)
        json_format: Use JSON format for file logs (default: False)
        file_level: File handler level (default: DEBUG)
        console_level: Stderr handler level, None to disable (default: None)
        max_bytes: Max size per log file before rotation
        backup_count: Number of backup files to keep
        suppress_noisy: Quiet down Azure SDK and HTTP client loggers

    Returns:
        Configured logger instance

    Raises:
        OSError: If the log file cannot be opened
    """
    log_file = Path(log_file or DEFAULT_LOG_FILE)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    if json_format:
        file_formatter: logging.Formatter = JSONFormatter()
    else:
        file_formatter = logging.Formatter(TEXT_FORMAT)

    # File handler with rotation
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    file_handler.setLevel(file_level)
    file_handler.setFormatter(file_formatter)

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # Capture all, handlers filter

    # Remove existing handlers to avoid duplicates on re-init
    root_logger.handlers.clear()
    root_logger.addHandler(file_handler)

    if console_level is not None:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(console_level)
        console_handler.setFormatter(ConsoleFormatter())
        root_logger.addHandler(console_handler)

    if suppress_noisy:
        for logger_name in NOISY_LOGGERS:
            logging.getLogger(logger_name).setLevel(logging.WARNING)

    logger = logging.getLogger(name)
    logger.debug(f"Logging initialized: file={log_file}, json={json_format}")

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance.

    Use this instead of logging.getLogger() to ensure consistent naming.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def parse_level(value: str) -> int:
    """
    Convert a level name ("debug", "INFO") or number ("10") to a logging level.

    Raises:
        ValueError: If the value is not a known level
    """
    value = value.strip()
    if value.isdigit():
        return int(value)
    level = logging.getLevelName(value.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {value}")
    return level
