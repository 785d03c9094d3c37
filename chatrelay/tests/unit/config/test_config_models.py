"""
Unit tests for configuration models.
"""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from chatrelay.config import get_config, reset_config
from chatrelay.config.models import AppConfig, LoggingConfig, ServerConfig


def _env_without(*names):
    return {key: value for key, value in os.environ.items() if key not in names}


def test_server_config_defaults():
    """Test that the port defaults to 8000 when PORT is unset."""
    with patch.dict(os.environ, _env_without("PORT", "SERVER_PORT", "HOST", "SERVER_HOST"), clear=True):
        config = ServerConfig()
        assert config.port == 8000
        assert config.host == "0.0.0.0"


def test_server_config_reads_port_env():
    with patch.dict(os.environ, {"PORT": "9001"}, clear=False):
        assert ServerConfig().port == 9001


def test_server_config_reads_prefixed_port_env():
    with patch.dict(os.environ, _env_without("PORT"), clear=True):
        with patch.dict(os.environ, {"SERVER_PORT": "9002"}):
            assert ServerConfig().port == 9002


def test_server_config_accepts_keyword_port():
    assert ServerConfig(port=8123).port == 8123


@pytest.mark.parametrize("port", ["0", "70000", "-1"])
def test_server_config_rejects_out_of_range_port(port):
    with patch.dict(os.environ, {"PORT": port}, clear=False):
        with pytest.raises(ValidationError, match="Port must be between 1 and 65535"):
            ServerConfig()


def test_logging_config_normalizes_level():
    with patch.dict(os.environ, {"LOGGING_LEVEL": "warning"}, clear=False):
        assert LoggingConfig().level == "WARNING"


def test_logging_config_rejects_bad_level():
    with patch.dict(os.environ, {"LOGGING_LEVEL": "LOUD"}, clear=False):
        with pytest.raises(ValidationError, match="Log level must be one of"):
            LoggingConfig()


def test_logging_config_rejects_bad_environment():
    with patch.dict(os.environ, {"LOGGING_ENVIRONMENT": "staging"}, clear=False):
        with pytest.raises(ValidationError, match="Environment must be one of"):
            LoggingConfig()


def test_logging_config_rejects_bad_format():
    with patch.dict(os.environ, {"LOGGING_FORMAT": "xml"}, clear=False):
        with pytest.raises(ValidationError, match="Log format must be one of"):
            LoggingConfig()


def test_app_config_legacy_dict_shape():
    with patch.dict(os.environ, {"PORT": "8100", "LOGGING_FORMAT": "json"}, clear=False):
        legacy = AppConfig().to_legacy_dict()

    assert legacy["port"] == 8100
    assert legacy["logging"]["format"] == "json"
    assert legacy["logging"]["environment"] == "unit_test"


def test_app_config_reads_dotenv_file(tmp_path, monkeypatch):
    """Test that nested server and logging settings pick up values from .env."""
    (tmp_path / ".env").write_text("PORT=9001\nLOGGING_FORMAT=json\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    with patch.dict(os.environ, _env_without("PORT", "SERVER_PORT", "LOGGING_FORMAT"), clear=True):
        config = AppConfig()

    assert config.server.port == 9001
    assert config.logging.format == "json"


def test_process_environment_overrides_dotenv(tmp_path, monkeypatch):
    (tmp_path / ".env").write_text("PORT=9001\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    with patch.dict(os.environ, {"PORT": "9100"}, clear=False):
        assert AppConfig().server.port == 9100


def test_get_config_returns_fresh_instance_under_pytest():
    reset_config()
    first = get_config()
    with patch.dict(os.environ, {"PORT": "8200"}, clear=False):
        second = get_config()

    assert first is not second
    assert second.server.port == 8200
