"""Tests for structured logging, request observation and settings."""

import json
import logging

import pytest

from src.logging_config.config import LogFormat, LoggingConfig, LogLevel
from src.logging_config.setup import (
    ConsoleFormatter,
    StructuredFormatter,
    configure_logging,
    get_logger,
)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestLoggingConfig:
    """Tests for logging configuration dataclasses."""

    def test_default_config_values(self):
        config = LoggingConfig()
        assert config.level == LogLevel.INFO
        assert config.format == LogFormat.JSON
        assert config.include_caller is True
        assert config.slow_threshold_ms == 1000.0
        assert config.service_name == "tradestation"

    def test_custom_config(self):
        config = LoggingConfig(
            level=LogLevel.DEBUG,
            format=LogFormat.CONSOLE,
            slow_threshold_ms=500.0,
            service_name="test",
        )
        assert config.level == LogLevel.DEBUG
        assert config.format == LogFormat.CONSOLE
        assert config.slow_threshold_ms == 500.0

    def test_log_level_enum_values(self):
        assert LogLevel.DEBUG.value == "DEBUG"
        assert LogLevel.INFO.value == "INFO"
        assert LogLevel.WARNING.value == "WARNING"
        assert LogLevel.ERROR.value == "ERROR"
        assert LogLevel.CRITICAL.value == "CRITICAL"

    def test_log_format_enum_values(self):
        assert LogFormat.JSON.value == "json"
        assert LogFormat.CONSOLE.value == "console"

    def test_from_settings(self):
        from src.settings import Settings
        settings = Settings(log_level="debug", log_format="JSON", slow_request_ms=250.0)
        config = LoggingConfig.from_settings(settings)
        assert config.level == LogLevel.DEBUG
        assert config.format == LogFormat.JSON
        assert config.slow_threshold_ms == 250.0

    def test_from_settings_unknown_values(self):
        from src.settings import Settings
        config = LoggingConfig.from_settings(Settings(log_level="loud", log_format="xml"))
        assert config.level == LogLevel.INFO
        assert config.format == LogFormat.CONSOLE


class TestStructuredFormatter:
    """Tests for JSON structured log formatting."""

    def test_formats_as_json(self):
        formatter = StructuredFormatter()
        record = logging.LogRecord(
            name="test", level=logging.INFO, pathname="test.py",
            lineno=1, msg="hello world", args=(), exc_info=None,
        )
        output = formatter.format(record)
        parsed = json.loads(output)
        assert parsed["message"] == "hello world"
        assert parsed["level"] == "INFO"
        assert parsed["logger"] == "test"
        assert "timestamp" in parsed

    def test_includes_service_name(self):
        formatter = StructuredFormatter(service_name="my-service")
        record = logging.LogRecord(
            name="test", level=logging.INFO, pathname="test.py",
            lineno=1, msg="test", args=(), exc_info=None,
        )
        parsed = json.loads(formatter.format(record))
        assert parsed["service"] == "my-service"

    def test_includes_caller_info(self):
        formatter = StructuredFormatter(include_caller=True)
        record = logging.LogRecord(
            name="test", level=logging.INFO, pathname="test.py",
            lineno=42, msg="test", args=(), exc_info=None,
        )
        parsed = json.loads(formatter.format(record))
        assert parsed["line"] == 42
        assert "module" in parsed
        assert "function" in parsed

    def test_excludes_caller_when_disabled(self):
        formatter = StructuredFormatter(include_caller=False)
        record = logging.LogRecord(
            name="test", level=logging.INFO, pathname="test.py",
            lineno=42, msg="test", args=(), exc_info=None,
        )
        parsed = json.loads(formatter.format(record))
        assert "line" not in parsed
        assert "function" not in parsed

    def test_formats_exception(self):
        formatter = StructuredFormatter()
        try:
            raise ValueError("test error")
        except ValueError:
            import sys
            record = logging.LogRecord(
                name="test", level=logging.ERROR, pathname="test.py",
                lineno=1, msg="failed", args=(), exc_info=sys.exc_info(),
            )
            parsed = json.loads(formatter.format(record))
            assert parsed["exception"]["type"] == "ValueError"
            assert "test error" in parsed["exception"]["message"]

    def test_includes_request_fields(self):
        formatter = StructuredFormatter()
        record = logging.LogRecord(
            name="test", level=logging.INFO, pathname="test.py",
            lineno=1, msg="test", args=(), exc_info=None,
        )
        record.endpoint = "get_positions"
        record.duration_ms = 42.5
        record.status_code = 200
        parsed = json.loads(formatter.format(record))
        assert parsed["endpoint"] == "get_positions"
        assert parsed["duration_ms"] == 42.5
        assert parsed["status_code"] == 200
        assert "method" not in parsed


class TestConsoleFormatter:
    """Tests for colored console log formatting."""

    def test_formats_readable_output(self):
        formatter = ConsoleFormatter()
        record = logging.LogRecord(
            name="test.module", level=logging.INFO, pathname="test.py",
            lineno=1, msg="hello", args=(), exc_info=None,
        )
        output = formatter.format(record)
        assert "test.module" in output
        assert "hello" in output

    def test_includes_level_name(self):
        formatter = ConsoleFormatter()
        record = logging.LogRecord(
            name="test", level=logging.WARNING, pathname="test.py",
            lineno=1, msg="warn", args=(), exc_info=None,
        )
        assert "WARNING" in formatter.format(record)

    def test_has_color_codes(self):
        formatter = ConsoleFormatter()
        record = logging.LogRecord(
            name="test", level=logging.ERROR, pathname="test.py",
            lineno=1, msg="error", args=(), exc_info=None,
        )
        output = formatter.format(record)
        assert "\033[31m" in output  # Red for ERROR

    def test_appends_request_fields(self):
        formatter = ConsoleFormatter()
        record = logging.LogRecord(
            name="test", level=logging.DEBUG, pathname="test.py",
            lineno=1, msg="GET /v3/brokerage/accounts -> 200", args=(), exc_info=None,
        )
        record.endpoint = "get_accounts"
        record.status_code = 200
        output = formatter.format(record)
        assert output.endswith("[endpoint=get_accounts status_code=200]")

    def test_no_brackets_without_request_fields(self):
        formatter = ConsoleFormatter()
        record = logging.LogRecord(
            name="test", level=logging.INFO, pathname="test.py",
            lineno=1, msg="plain", args=(), exc_info=None,
        )
        assert formatter.format(record).endswith("plain")


class TestRequestFields:
    """Tests for picking request extras off a record."""

    def test_only_present_fields_in_order(self):
        from src.logging_config.setup import request_fields
        record = logging.LogRecord(
            name="test", level=logging.INFO, pathname="test.py",
            lineno=1, msg="x", args=(), exc_info=None,
        )
        record.duration_ms = 3.5
        record.endpoint = "get_routes"
        record.unrelated = "ignored"
        assert list(request_fields(record).items()) == [
            ("endpoint", "get_routes"),
            ("duration_ms", 3.5),
        ]


@pytest.mark.usefixtures("restore_root_logger")
class TestConfigureLogging:
    """Tests for the configure_logging setup function."""

    def test_configures_root_logger(self):
        configure_logging(LoggingConfig(format=LogFormat.CONSOLE))
        root = logging.getLogger()
        assert len(root.handlers) == 1

    def test_json_format(self):
        configure_logging(LoggingConfig(format=LogFormat.JSON))
        root = logging.getLogger()
        assert isinstance(root.handlers[0].formatter, StructuredFormatter)

    def test_console_format(self):
        configure_logging(LoggingConfig(format=LogFormat.CONSOLE))
        root = logging.getLogger()
        assert isinstance(root.handlers[0].formatter, ConsoleFormatter)

    def test_sets_log_level(self):
        configure_logging(LoggingConfig(level=LogLevel.DEBUG))
        root = logging.getLogger()
        assert root.level == logging.DEBUG

    def test_get_logger_returns_logger(self):
        logger = get_logger("test.module")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "test.module"

    def test_quiets_noisy_loggers(self):
        configure_logging()
        assert logging.getLogger("httpx").level >= logging.WARNING
        assert logging.getLogger("httpcore").level >= logging.WARNING

    def test_env_var_override_level(self, monkeypatch):
        monkeypatch.setenv("TRADESTATION_LOG_LEVEL", "DEBUG")
        configure_logging(LoggingConfig(level=LogLevel.ERROR))
        root = logging.getLogger()
        assert root.level == logging.DEBUG

    def test_env_var_override_format(self, monkeypatch):
        monkeypatch.setenv("TRADESTATION_LOG_FORMAT", "CONSOLE")
        configure_logging(LoggingConfig(format=LogFormat.JSON))
        root = logging.getLogger()
        assert isinstance(root.handlers[0].formatter, ConsoleFormatter)


class TestLoggingObserver:
    """Tests for routing request events into logging."""

    LOGGER = "test.tradestation.requests"

    def _event(self, **kwargs):
        from src.tradestation.observer import RequestEvent
        fields = dict(
            endpoint="get_positions",
            method="GET",
            url="https://api.tradestation.com/v3/brokerage/accounts/1/positions?symbol=MSFT",
            status_code=200,
            elapsed_ms=12.345,
        )
        fields.update(kwargs)
        return RequestEvent(**fields)

    def _observer(self, threshold=1000.0):
        from src.tradestation.observer import LoggingObserver
        return LoggingObserver(
            logger=logging.getLogger(self.LOGGER),
            config=LoggingConfig(slow_threshold_ms=threshold),
        )

    def test_success_logs_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger=self.LOGGER):
            self._observer()(self._event())

        record = caplog.records[-1]
        assert record.levelno == logging.DEBUG
        assert record.endpoint == "get_positions"
        assert record.path == "/v3/brokerage/accounts/1/positions"
        assert record.duration_ms == 12.35
        assert "symbol=MSFT" not in record.getMessage()

    def test_slow_request_logs_warning(self, caplog):
        with caplog.at_level(logging.DEBUG, logger=self.LOGGER):
            self._observer(threshold=10.0)(self._event(elapsed_ms=10.0))
        assert caplog.records[-1].levelno == logging.WARNING
        assert "Slow request" in caplog.records[-1].getMessage()

    def test_failure_logs_error(self, caplog):
        from src.tradestation.exceptions import RequestFailedError
        error = RequestFailedError("get_positions", status_code=500)
        with caplog.at_level(logging.DEBUG, logger=self.LOGGER):
            self._observer()(self._event(status_code=500, error=error))

        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert record.status_code == 500
        assert "HTTP 500" in record.getMessage()

    def test_default_logger_name(self):
        from src.tradestation.observer import LoggingObserver
        assert LoggingObserver().logger.name == "src.tradestation.requests"


class TestSettings:
    """Tests for environment-backed settings."""

    def test_defaults(self, monkeypatch):
        from src.settings import Settings
        monkeypatch.delenv("TRADESTATION_BASE_URL", raising=False)
        settings = Settings(_env_file=None)
        assert settings.base_url == "https://api.tradestation.com"
        assert settings.request_timeout == 30.0
        assert settings.slow_request_ms == 1000.0

    def test_env_prefix(self, monkeypatch):
        from src.settings import Settings
        monkeypatch.setenv("TRADESTATION_ACCESS_TOKEN", "from-env")
        monkeypatch.setenv("TRADESTATION_REQUEST_TIMEOUT", "5")
        settings = Settings(_env_file=None)
        assert settings.access_token == "from-env"
        assert settings.request_timeout == 5.0

    def test_get_settings_cached(self, monkeypatch):
        from src.settings import get_settings
        get_settings.cache_clear()
        monkeypatch.setenv("TRADESTATION_ACCESS_TOKEN", "first")
        try:
            assert get_settings() is get_settings()
            assert get_settings().access_token == "first"
        finally:
            get_settings.cache_clear()
