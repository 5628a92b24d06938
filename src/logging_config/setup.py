"""Logging Setup.

One-call configuration for applications embedding the TradeStation client.
The library never configures logging itself; scripts and services call
configure_logging() once at startup.
"""

import json
import logging
import os
import sys
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Optional

from src.logging_config.config import DEFAULT_LOGGING_CONFIG, LogFormat, LoggingConfig, LogLevel

# Extras attached by LoggingObserver.
RECORD_EXTRAS = ("endpoint", "method", "path", "status_code", "duration_ms")

_LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[35m",
}
_RESET = "\033[0m"


def request_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Request extras present on ``record``, in RECORD_EXTRAS order."""
    return {key: getattr(record, key) for key in RECORD_EXTRAS if hasattr(record, key)}


class StructuredFormatter(logging.Formatter):
    """One JSON object per line: level, logger, message, service, request extras."""

    def __init__(self, service_name: str = "tradestation", include_caller: bool = True):
        super().__init__()
        self.service_name = service_name
        self.include_caller = include_caller

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "service": self.service_name,
            "message": record.getMessage(),
            **request_fields(record),
        }
        if self.include_caller:
            entry.update(module=record.module, function=record.funcName, line=record.lineno)
        if record.exc_info and record.exc_info[1] is not None:
            exc = record.exc_info[1]
            entry["exception"] = {
                "type": type(exc).__name__,
                "message": str(exc),
                "traceback": self.formatException(record.exc_info),
            }
        return json.dumps(entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """Colored single-line output with request extras as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        color = _LEVEL_COLORS.get(record.levelno, "")
        clock = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        fields = " ".join(f"{k}={v}" for k, v in request_fields(record).items())

        line = f"{color}{clock} {record.levelname:<8}{_RESET} {record.name}: {record.getMessage()}"
        if fields:
            line = f"{line} [{fields}]"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def _with_env_overrides(config: LoggingConfig) -> LoggingConfig:
    level = os.environ.get("TRADESTATION_LOG_LEVEL", "").upper()
    if level in LogLevel.__members__:
        config = replace(config, level=LogLevel(level))

    fmt = os.environ.get("TRADESTATION_LOG_FORMAT", "").lower()
    if fmt in {f.value for f in LogFormat}:
        config = replace(config, format=LogFormat(fmt))
    return config


def configure_logging(config: Optional[LoggingConfig] = None) -> None:
    """Install a single stderr handler on the root logger.

    ``TRADESTATION_LOG_LEVEL`` and ``TRADESTATION_LOG_FORMAT`` take precedence
    over ``config``.
    """
    config = _with_env_overrides(config or DEFAULT_LOGGING_CONFIG)

    if config.format == LogFormat.JSON:
        formatter = StructuredFormatter(config.service_name, config.include_caller)
    else:
        formatter = ConsoleFormatter()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(config.level.value)

    # httpx logs every request at INFO
    for noisy in ("httpx", "httpcore", "asyncio"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance, typically ``get_logger(__name__)``."""
    return logging.getLogger(name)
