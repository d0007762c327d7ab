"""Centralized configuration using Pydantic Settings.

Configuration can be overridden via environment variables:
- TG_CACHE_ENABLED=false
- TG_CACHE_MAX_SIZE=10000
- TG_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain.errors import ConfigurationError


class CacheConfig(BaseSettings):
    """Memoization configuration for query components.

    Environment variables prefixed with TG_CACHE_.
    """

    model_config = SettingsConfigDict(env_prefix="TG_CACHE_")

    enabled: bool = True
    max_size: Optional[int] = Field(default=None, gt=0)


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Environment variables prefixed with TG_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="TG_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AppConfig(BaseSettings):
    """Main configuration aggregating all sub-configs.

        config = get_config()
        print(config.cache.max_size)

    Environment variables prefixed with TG_.
    """

    model_config = SettingsConfigDict(env_prefix="TG_")

    cache: CacheConfig = Field(default_factory=CacheConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache."""
    get_config.cache_clear()


def configure_logging(config: Optional[ObservabilityConfig] = None) -> None:
    """Apply the observability settings to the root logger.

    Raises:
        ConfigurationError: If the configured level is not a logging level.
    """
    config = config or get_config().observability
    level = logging.getLevelName(config.level.upper())
    if not isinstance(level, int):
        raise ConfigurationError(
            f"Unknown log level '{config.level}'",
            setting_name="TG_LOG_LEVEL",
            expected_type="DEBUG, INFO, WARNING, ERROR or CRITICAL",
        )
    logging.basicConfig(level=level, format=config.format)
