"""Logging constants and defaults."""

import logging
from pathlib import Path

# Default settings
DEFAULT_LOG_FILE = Path("/var/log/apt-transport-blob.log")
DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_BACKUP_COUNT = 5
DEFAULT_FILE_LEVEL = logging.DEBUG

# Plain-text file layout: timestamp, level, logger:line, message
TEXT_FORMAT = "%(asctime)s [%(levelname)s] <%(name)s:%(lineno)d> %(message)s"

# Noisy loggers to suppress. The HTTP logging policy would otherwise write
# request headers, including bearer tokens, at DEBUG.
NOISY_LOGGERS = [
    "azure.core.pipeline.policies.http_logging_policy",
    "azure.core.pipeline.transport",
    "azure.identity",
    "urllib3",
    "aiohttp",
]
