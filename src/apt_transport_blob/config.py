"""Blob transport configuration from environment variables."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from core.errors import ConfigurationError
from core.logging.constants import (
    DEFAULT_BACKUP_COUNT,
    DEFAULT_FILE_LEVEL,
    DEFAULT_LOG_FILE,
    DEFAULT_MAX_BYTES,
)
from core.logging.setup import parse_level


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    value = value.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {value!r}")


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}", cause=e) from e


def _env_level(name: str, default: Optional[int]) -> Optional[int]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return parse_level(value)
    except ValueError as e:
        raise ConfigurationError(f"{name}: {e}", cause=e) from e


@dataclass
class TransportConfig:
    """Logging and credential settings for one method process.

    Load from environment using TransportConfig.from_env().
    """

    # Logging
    log_file: Path = DEFAULT_LOG_FILE
    log_level: int = DEFAULT_FILE_LEVEL
    json_logs: bool = False
    console_level: Optional[int] = None  # None disables stderr logging
    max_bytes: int = DEFAULT_MAX_BYTES
    backup_count: int = DEFAULT_BACKUP_COUNT

    # Credentials
    storage_bearer_token: Optional[str] = None

    @classmethod
    def from_env(cls) -> "TransportConfig":
        """Load configuration from environment variables.

        Optional environment variables (with defaults):
            BLOB_TRANSPORT_LOG_FILE: /var/log/apt-transport-blob.log (default)
            BLOB_TRANSPORT_LOG_LEVEL: DEBUG (default)
            BLOB_TRANSPORT_JSON_LOGS: false (default)
            BLOB_TRANSPORT_CONSOLE_LOG_LEVEL: unset (default, no stderr logging)
            BLOB_TRANSPORT_LOG_MAX_BYTES: 10485760 (default)
            BLOB_TRANSPORT_LOG_BACKUP_COUNT: 5 (default)
            AZURE_STORAGE_BEARER_TOKEN: storage-scoped bearer token, takes
                priority over the Azure credential chain

        Raises:
            ConfigurationError: If a value cannot be parsed
        """
        return cls(
            log_file=Path(os.getenv("BLOB_TRANSPORT_LOG_FILE") or DEFAULT_LOG_FILE),
            log_level=_env_level("BLOB_TRANSPORT_LOG_LEVEL", DEFAULT_FILE_LEVEL),
            json_logs=_env_bool("BLOB_TRANSPORT_JSON_LOGS", False),
            console_level=_env_level("BLOB_TRANSPORT_CONSOLE_LOG_LEVEL", None),
            max_bytes=_env_int("BLOB_TRANSPORT_LOG_MAX_BYTES", DEFAULT_MAX_BYTES),
            backup_count=_env_int(
                "BLOB_TRANSPORT_LOG_BACKUP_COUNT", DEFAULT_BACKUP_COUNT
            ),
            storage_bearer_token=os.getenv("AZURE_STORAGE_BEARER_TOKEN") or None,
        )
