"""
FPL API Client Configuration

This module provides configuration management for the FPL league tracker.
It includes environment variable loading, configuration validation, and default settings.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from utils.constants import (
    CACHE_TTL_SECONDS,
    FPL_BASE_URL,
    MAX_ATTEMPTS,
    RETRY_BASE_DELAY,
    SETTLE_DELAY,
    TEAM_DELAY,
)

# Load environment variables
load_dotenv()

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _parse_proxies(raw: Optional[str]) -> List[str]:
    """Split a comma-separated proxy list; an empty item means direct fetch."""
    if raw is None:
        return [""]
    return [item.strip() for item in raw.split(",")]


def _optional_float(raw: Optional[str]) -> Optional[float]:
    if raw is None or raw.strip() == "":
        return None
    return float(raw)


@dataclass
class FPLConfig:
    """Configuration for FPL league fetch operations."""

    # API settings
    base_url: str = FPL_BASE_URL
    proxies: List[str] = field(default_factory=lambda: [""])
    request_timeout: Optional[float] = None

    # Retry and pacing
    max_attempts: int = MAX_ATTEMPTS
    retry_delay: float = RETRY_BASE_DELAY
    settle_delay: float = SETTLE_DELAY
    team_delay: float = TEAM_DELAY

    # Caching
    cache_enabled: bool = True
    cache_ttl_seconds: int = CACHE_TTL_SECONDS
    cache_dir: Optional[str] = None

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls) -> 'FPLConfig':
        """Create configuration from environment variables."""
        return cls(
            base_url=os.getenv("FPL_BASE_URL", FPL_BASE_URL),
            proxies=_parse_proxies(os.getenv("FPL_PROXIES")),
            request_timeout=_optional_float(os.getenv("FPL_REQUEST_TIMEOUT")),
            max_attempts=int(os.getenv("FPL_MAX_ATTEMPTS", str(MAX_ATTEMPTS))),
            retry_delay=float(os.getenv("FPL_RETRY_DELAY", str(RETRY_BASE_DELAY))),
            settle_delay=float(os.getenv("FPL_SETTLE_DELAY", str(SETTLE_DELAY))),
            team_delay=float(os.getenv("FPL_TEAM_DELAY", str(TEAM_DELAY))),
            cache_enabled=os.getenv("FPL_CACHE_ENABLED", "true").lower() == "true",
            cache_ttl_seconds=int(os.getenv("FPL_CACHE_TTL_SECONDS", str(CACHE_TTL_SECONDS))),
            cache_dir=os.getenv("FPL_CACHE_DIR") or None,
            log_level=os.getenv("FPL_LOG_LEVEL", "INFO"),
            log_file=os.getenv("FPL_LOG_FILE"),
        )

    def validate(self) -> None:
        """Validate configuration values."""
        if not self.proxies:
            raise ValueError("proxies must contain at least one entry")
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.retry_delay < 0:
            raise ValueError("retry_delay must be non-negative")
        if self.settle_delay < 0 or self.team_delay < 0:
            raise ValueError("request delays must be non-negative")
        if self.request_timeout is not None and self.request_timeout <= 0:
            raise ValueError("request_timeout must be positive")
        if self.cache_ttl_seconds < 0:
            raise ValueError("cache_ttl_seconds must be non-negative")

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'base_url': self.base_url,
            'proxies': list(self.proxies),
            'request_timeout': self.request_timeout,
            'max_attempts': self.max_attempts,
            'retry_delay': self.retry_delay,
            'settle_delay': self.settle_delay,
            'team_delay': self.team_delay,
            'cache_enabled': self.cache_enabled,
            'cache_ttl_seconds': self.cache_ttl_seconds,
            'cache_dir': self.cache_dir,
            'log_level': self.log_level,
            'log_file': self.log_file,
        }


def configure_logging(config: FPLConfig) -> None:
    """Configure root logging from the config's level and optional log file."""
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if config.log_file:
        handlers.append(logging.FileHandler(config.log_file, encoding='utf-8'))
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
    )


# Default configuration instance
DEFAULT_CONFIG = FPLConfig.from_env()

def get_config() -> FPLConfig:
    """Get the default configuration."""
    return DEFAULT_CONFIG

def create_config(**kwargs) -> FPLConfig:
    """Create a custom configuration."""
    config = FPLConfig.from_env()
    for key, value in kwargs.items():
        if hasattr(config, key):
            setattr(config, key, value)
    config.validate()
    return config
