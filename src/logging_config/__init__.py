"""Structured Logging.

JSON and console log formatting for applications embedding the
TradeStation client.
"""

from src.logging_config.config import LogFormat, LoggingConfig, LogLevel
from src.logging_config.setup import configure_logging, get_logger

__all__ = [
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "configure_logging",
    "get_logger",
]
