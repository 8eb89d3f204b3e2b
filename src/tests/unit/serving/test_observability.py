"""Unit tests for process settings and structured logging."""

import json
import logging

import pytest
import structlog

from serving.config import LogFormat, LogLevel, Settings, get_settings
from serving.observability import get_logger, redact_secrets, setup_logging


class TestSettings:
    def test_env_prefix(self, monkeypatch):
        """Test settings are read from FEAST_ environment variables."""
        monkeypatch.setenv("FEAST_BUILD_VERSION", "0.26.0")
        monkeypatch.setenv("FEAST_LOG_FORMAT", "json")

        settings = Settings()

        assert settings.build_version == "0.26.0"
        assert settings.log_format == LogFormat.JSON

    def test_defaults(self, monkeypatch):
        """Test documented defaults."""
        monkeypatch.delenv("FEAST_BUILD_VERSION", raising=False)

        settings = Settings(_env_file=None)

        assert settings.app_name == "feast-serving"
        assert settings.build_version == "unknown"
        assert settings.is_production is False

    def test_get_settings_cached(self):
        """Test get_settings returns a cached instance."""
        assert get_settings() is get_settings()


@pytest.fixture
def reset_structlog():
    yield
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()


@pytest.mark.usefixtures("reset_structlog")
class TestLogging:
    def test_setup_text_logging(self, caplog):
        """Test text logging renders the event and bound values."""
        caplog.set_level(logging.DEBUG)
        setup_logging(log_level=LogLevel.DEBUG, log_format=LogFormat.TEXT)
        logger = get_logger("serving.test.text")

        logger.info("Serving configuration loaded", active_store="online")

        assert "Serving configuration loaded" in caplog.text
        assert "active_store" in caplog.text

    def test_setup_json_logging(self, caplog):
        """Test JSON logging adds service context."""
        caplog.set_level(logging.INFO)
        setup_logging(
            service_name="feast-serving-test",
            log_level=LogLevel.INFO,
            log_format=LogFormat.JSON,
        )
        logger = get_logger("serving.test.json")

        logger.info("Registry refreshed", registry="registry.db")

        record = json.loads(caplog.records[-1].getMessage())
        assert record["event"] == "Registry refreshed"
        assert record["service"] == "feast-serving-test"
        assert record["registry"] == "registry.db"
        assert record["level"] == "info"


class TestRedaction:
    def test_top_level_password(self):
        """Test password fields are masked."""
        event = redact_secrets(None, "info", {"event": "x", "password": "hunter2"})

        assert event["password"] == "***"

    def test_settings_map_password(self):
        """Test passwords inside a settings map are masked."""
        settings = {"host": "h", "port": "6379", "password": "hunter2"}

        event = redact_secrets(None, "debug", {"event": "x", "settings": settings})

        assert event["settings"] == {"host": "h", "port": "6379", "password": "***"}
        assert settings["password"] == "hunter2"

    def test_empty_password_left_alone(self):
        """Test empty values are not replaced."""
        event = redact_secrets(None, "info", {"event": "x", "password": ""})

        assert event["password"] == ""
