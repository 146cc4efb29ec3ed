"""Tests for transport configuration."""

import logging
from pathlib import Path

import pytest

from apt_transport_blob.config import TransportConfig
from core.errors import ConfigurationError
from core.logging.constants import DEFAULT_LOG_FILE

ENV_VARS = [
    "BLOB_TRANSPORT_LOG_FILE",
    "BLOB_TRANSPORT_LOG_LEVEL",
    "BLOB_TRANSPORT_JSON_LOGS",
    "BLOB_TRANSPORT_CONSOLE_LOG_LEVEL",
    "BLOB_TRANSPORT_LOG_MAX_BYTES",
    "BLOB_TRANSPORT_LOG_BACKUP_COUNT",
    "AZURE_STORAGE_BEARER_TOKEN",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestTransportConfig:
    """Test TransportConfig dataclass and environment loading."""

    def test_from_env_defaults(self):
        config = TransportConfig.from_env()

        assert config.log_file == DEFAULT_LOG_FILE
        assert config.log_level == logging.DEBUG
        assert config.json_logs is False
        assert config.console_level is None
        assert config.max_bytes == 10 * 1024 * 1024
        assert config.backup_count == 5
        assert config.storage_bearer_token is None

    def test_from_env_all_variables(self, monkeypatch):
        env_vars = {
            "BLOB_TRANSPORT_LOG_FILE": "/tmp/blob/method.log",
            "BLOB_TRANSPORT_LOG_LEVEL": "info",
            "BLOB_TRANSPORT_JSON_LOGS": "true",
            "BLOB_TRANSPORT_CONSOLE_LOG_LEVEL": "WARNING",
            "BLOB_TRANSPORT_LOG_MAX_BYTES": "2048",
            "BLOB_TRANSPORT_LOG_BACKUP_COUNT": "2",
            "AZURE_STORAGE_BEARER_TOKEN": "eyJ0eXAi",
        }
        for key, value in env_vars.items():
            monkeypatch.setenv(key, value)

        config = TransportConfig.from_env()

        assert config.log_file == Path("/tmp/blob/method.log")
        assert config.log_level == logging.INFO
        assert config.json_logs is True
        assert config.console_level == logging.WARNING
        assert config.max_bytes == 2048
        assert config.backup_count == 2
        assert config.storage_bearer_token == "eyJ0eXAi"

    @pytest.mark.parametrize("value,expected", [("1", True), ("no", False), ("", False)])
    def test_bool_values(self, monkeypatch, value, expected):
        monkeypatch.setenv("BLOB_TRANSPORT_JSON_LOGS", value)
        assert TransportConfig.from_env().json_logs is expected

    def test_empty_token_is_none(self, monkeypatch):
        monkeypatch.setenv("AZURE_STORAGE_BEARER_TOKEN", "")
        assert TransportConfig.from_env().storage_bearer_token is None

    @pytest.mark.parametrize(
        "name,value",
        [
            ("BLOB_TRANSPORT_JSON_LOGS", "maybe"),
            ("BLOB_TRANSPORT_LOG_LEVEL", "chatty"),
            ("BLOB_TRANSPORT_CONSOLE_LOG_LEVEL", "loud"),
            ("BLOB_TRANSPORT_LOG_MAX_BYTES", "10MB"),
            ("BLOB_TRANSPORT_LOG_BACKUP_COUNT", "many"),
        ],
    )
    def test_invalid_values_raise(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)

        with pytest.raises(ConfigurationError, match=name):
            TransportConfig.from_env()
