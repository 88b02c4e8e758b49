"""
Synergy Wholesale exporter - domain inventory metrics for Prometheus.

This package polls a Synergy Wholesale reseller account over its SOAP API,
caches the listDomains response for a configurable TTL, and exposes the
domains as Prometheus gauges.
"""

__version__ = "0.1.0"

from synergy_wholesale_exporter.exceptions import (
    ExporterError,
    ConfigError,
    TransportError,
    ProtocolError,
    MalformedResponseError,
    UpstreamError,
)
from synergy_wholesale_exporter.enums import (
    LogLevel,
    ConfigErrorCode,
    TransportErrorCode,
    ProtocolErrorCode,
    ResponseStatus,
)
from synergy_wholesale_exporter.models import (
    Credentials,
    DomainRecord,
    DomainListResponse,
    ListDomainsRequest,
    CacheEntry,
    upstream_date_to_timestamp,
)
from synergy_wholesale_exporter.config import (
    RetryConfig,
    LoggingConfig,
    ServerConfig,
    ExporterConfig,
)
from synergy_wholesale_exporter.soap_codec import (
    build_envelope,
    encode_request,
    decode_response,
)
from synergy_wholesale_exporter.structured_logger import (
    StructuredLogger,
    LogEntry,
    create_logger,
)
from synergy_wholesale_exporter.retry_manager import (
    RetryManager,
    RetryResult,
)
from synergy_wholesale_exporter.api_client import (
    API_URL,
    SynergyWholesaleClient,
)
from synergy_wholesale_exporter.cache import (
    DomainListCache,
)
from synergy_wholesale_exporter.collector import (
    DomainCollector,
    project,
)
from synergy_wholesale_exporter.server import (
    create_app,
    create_registry,
    create_server,
    parse_listen_address,
)
from synergy_wholesale_exporter.cli import (
    main as cli_main,
    create_parser,
    build_config,
)

__all__ = [
    # Exceptions
    "ExporterError",
    "ConfigError",
    "TransportError",
    "ProtocolError",
    "MalformedResponseError",
    "UpstreamError",
    # Enums
    "LogLevel",
    "ConfigErrorCode",
    "TransportErrorCode",
    "ProtocolErrorCode",
    "ResponseStatus",
    # Models
    "Credentials",
    "DomainRecord",
    "DomainListResponse",
    "ListDomainsRequest",
    "CacheEntry",
    "upstream_date_to_timestamp",
    # Configuration
    "RetryConfig",
    "LoggingConfig",
    "ServerConfig",
    "ExporterConfig",
    # SOAP Codec
    "build_envelope",
    "encode_request",
    "decode_response",
    # Logging
    "StructuredLogger",
    "LogEntry",
    "create_logger",
    # Retry Manager
    "RetryManager",
    "RetryResult",
    # API Client
    "API_URL",
    "SynergyWholesaleClient",
    # Cache
    "DomainListCache",
    # Collector
    "DomainCollector",
    "project",
    # Server
    "create_app",
    "create_registry",
    "create_server",
    "parse_listen_address",
    # CLI
    "cli_main",
    "create_parser",
    "build_config",
]
