"""
Exception classes for the Synergy Wholesale exporter.

All exceptions inherit from ExporterError and provide structured
error information with codes, messages, and optional details.
"""

from typing import Optional


class ExporterError(Exception):
    """Base exception for all exporter errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConfigError(ExporterError):
    """Raised when startup configuration is missing or invalid."""

    pass


class TransportError(ExporterError):
    """Raised when the HTTP exchange with the upstream API fails."""

    pass


class ProtocolError(ExporterError):
    """Raised when the upstream reply is not the expected SOAP structure."""

    pass


class MalformedResponseError(ProtocolError):
    """Raised when a response envelope is not XML or lacks Envelope/Body/return."""

    pass


class UpstreamError(ExporterError):
    """Raised for a decoded response whose top-level status is not OK."""

    pass
