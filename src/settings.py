"""Centralized settings for the TradeStation client.

Uses pydantic-settings to load from environment variables (prefixed
TRADESTATION_) and an optional .env file.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """TradeStation client settings loaded from environment variables."""

    # --- API ---
    # Obtained and refreshed by an external OAuth flow.
    access_token: str = ""
    base_url: str = "https://api.tradestation.com"
    request_timeout: float = 30.0

    # --- Logging ---
    log_level: str = "INFO"
    log_format: str = "console"
    slow_request_ms: float = 1000.0

    model_config = {
        "env_prefix": "TRADESTATION_",
        "env_file": ".env",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings singleton."""
    return Settings()
