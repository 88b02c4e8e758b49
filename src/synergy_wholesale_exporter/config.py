"""
Configuration dataclasses for the Synergy Wholesale exporter.

This module defines the configuration structures assembled by the CLI
from flags and environment variables: credentials, cache TTL, upstream
timeout and retry behaviour, HTTP listener, and logging.
"""

from dataclasses import dataclass, field

from .models import Credentials

DEFAULT_CACHE_TTL_SECONDS = 3600
DEFAULT_REQUEST_TIMEOUT_SECONDS = 30.0
DEFAULT_LISTEN_ADDRESS = ":8080"


@dataclass
class RetryConfig:
    """Retry behavior for the upstream exchange (disabled by default)."""

    max_retries: int = 0
    base_delay_seconds: float = 1.0
    max_delay_seconds: float = 30.0


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "info"
    output_format: str = "text"  # 'json' or 'text'


@dataclass
class ServerConfig:
    """Metrics HTTP listener configuration."""

    listen_address: str = DEFAULT_LISTEN_ADDRESS


@dataclass
class ExporterConfig:
    """Main exporter configuration combining all sub-configurations."""

    credentials: Credentials
    cache_ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS
    request_timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS
    retry: RetryConfig = field(default_factory=RetryConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
