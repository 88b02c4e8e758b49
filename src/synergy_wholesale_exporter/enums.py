"""
Enumeration types for the Synergy Wholesale exporter.

These enums provide type-safe constants for error codes and logging
options throughout the system.
"""

from enum import Enum


class LogLevel(Enum):
    """Logging severity levels."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"

    @property
    def severity(self) -> int:
        """Numeric severity used for threshold comparisons."""
        return _SEVERITY[self]


_SEVERITY = {
    LogLevel.DEBUG: 10,
    LogLevel.INFO: 20,
    LogLevel.WARN: 30,
    LogLevel.ERROR: 40,
}


class ConfigErrorCode(Enum):
    """Error codes for startup configuration failures."""

    MISSING_RESELLER_ID = "missing_reseller_id"
    MISSING_API_KEY = "missing_api_key"
    INVALID_TTL = "invalid_ttl"
    INVALID_ADDRESS = "invalid_address"


class TransportErrorCode(Enum):
    """Error codes for the upstream HTTP exchange."""

    NETWORK_ERROR = "network_error"
    TLS_ERROR = "tls_error"
    TIMEOUT = "timeout"
    HTTP_ERROR = "http_error"
    READ_ERROR = "read_error"


class ProtocolErrorCode(Enum):
    """Error codes for SOAP envelope decoding."""

    NOT_XML = "not_xml"
    MISSING_ELEMENT = "missing_element"
    INVALID_FIELD = "invalid_field"
    UNKNOWN_OPERATION = "unknown_operation"


class ResponseStatus(Enum):
    """Status strings reported by the upstream API."""

    OK = "OK"
