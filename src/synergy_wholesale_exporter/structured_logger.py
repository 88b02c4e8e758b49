"""
Structured logger for the Synergy Wholesale exporter.

Provides one-line log output in either JSON or human-readable text,
a minimum level threshold, and masking of credentials so the API key
never reaches the log stream.
"""

import json
import sys
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, TextIO

from .enums import LogLevel


@dataclass
class LogEntry:
    """Represents a single log entry with all metadata."""

    timestamp: str
    level: LogLevel
    component: str
    message: str
    data: dict = field(default_factory=dict)


class StructuredLogger:
    """
    Logger with JSON or text output.

    Supports:
    - JSON and human-readable text output formats
    - Level threshold (entries below it are dropped)
    - Automatic masking of sensitive data (api keys, tokens, passwords)
    - Error context logging
    """

    # Keys that should be masked in log output
    SENSITIVE_KEYS = frozenset({
        'apikey', 'api_key', 'token', 'secret', 'password',
        'auth', 'authorization', 'credential', 'credentials',
    })

    MASK_VALUE = "***MASKED***"

    # Recent entries kept for inspection
    MAX_RECORDED_ENTRIES = 1000

    def __init__(
        self,
        output_format: str = "text",
        level: LogLevel = LogLevel.INFO,
        output_stream: Optional[TextIO] = None,
    ):
        """
        Initialize the logger.

        Args:
            output_format: Output format - 'json' or 'text'
            level: Minimum level written to the stream
            output_stream: Output stream for log entries (defaults to sys.stdout)
        """
        if output_format not in ("json", "text"):
            raise ValueError(f"Invalid output_format: {output_format}")

        self._output_format = output_format
        self._level = level
        self._output_stream = output_stream or sys.stdout
        self._entries: deque[LogEntry] = deque(maxlen=self.MAX_RECORDED_ENTRIES)

    @property
    def output_format(self) -> str:
        """Get the current output format."""
        return self._output_format

    @property
    def level(self) -> LogLevel:
        return self._level

    @property
    def entries(self) -> list[LogEntry]:
        """Get recently logged entries."""
        return list(self._entries)

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level.severity >= self._level.severity

    def log(
        self,
        level: LogLevel,
        component: str,
        message: str,
        data: Optional[dict] = None,
    ) -> Optional[LogEntry]:
        """
        Log an entry in the configured format.

        Args:
            level: Log severity level
            component: Component name generating the log
            message: Human-readable log message
            data: Optional additional data to include

        Returns:
            The created LogEntry, or None if the level is below the threshold
        """
        if not self.is_enabled_for(level):
            return None

        entry = LogEntry(
            timestamp=datetime.now(timezone.utc).isoformat(),
            level=level,
            component=component,
            message=message,
            data=self.mask_sensitive_data(data or {}),
        )

        self._entries.append(entry)
        self._output_entry(entry)

        return entry

    def debug(self, component: str, message: str, data: Optional[dict] = None) -> Optional[LogEntry]:
        return self.log(LogLevel.DEBUG, component, message, data)

    def info(self, component: str, message: str, data: Optional[dict] = None) -> Optional[LogEntry]:
        return self.log(LogLevel.INFO, component, message, data)

    def warn(self, component: str, message: str, data: Optional[dict] = None) -> Optional[LogEntry]:
        return self.log(LogLevel.WARN, component, message, data)

    def log_error(
        self,
        component: str,
        message: str,
        error: Optional[Exception] = None,
        request_url: Optional[str] = None,
        response_status_code: Optional[int] = None,
        additional_data: Optional[dict] = None,
    ) -> Optional[LogEntry]:
        """
        Log an error with full context.

        Args:
            component: Component name generating the log
            message: Human-readable error message
            error: Optional exception object
            request_url: Optional URL of the failed request
            response_status_code: Optional HTTP status code
            additional_data: Optional additional context data

        Returns:
            The created LogEntry object
        """
        data = additional_data.copy() if additional_data else {}

        if error is not None:
            data["error_message"] = str(error)
            data["error_type"] = type(error).__name__
            code = getattr(error, "code", None)
            if code is not None:
                data["error_code"] = code

        if request_url is not None:
            data["request_url"] = request_url

        if response_status_code is not None:
            data["response_status_code"] = response_status_code

        return self.log(LogLevel.ERROR, component, message, data)

    def mask_sensitive_data(self, data: dict) -> dict:
        """
        Recursively mask sensitive data in a dictionary.

        Args:
            data: Dictionary potentially containing sensitive data

        Returns:
            New dictionary with sensitive values masked
        """
        if not isinstance(data, dict):
            return data

        masked = {}
        for key, value in data.items():
            key_lower = key.lower()

            is_sensitive = any(
                sensitive_key in key_lower
                for sensitive_key in self.SENSITIVE_KEYS
            )

            if is_sensitive:
                masked[key] = self.MASK_VALUE
            elif isinstance(value, dict):
                masked[key] = self.mask_sensitive_data(value)
            elif isinstance(value, list):
                masked[key] = [
                    self.mask_sensitive_data(item) if isinstance(item, dict) else item
                    for item in value
                ]
            else:
                masked[key] = value

        return masked

    def _output_entry(self, entry: LogEntry) -> None:
        if self._output_format == "json":
            line = self.format_json(entry)
        else:
            line = self.format_text(entry)
        self._output_stream.write(line + "\n")
        self._output_stream.flush()

    def format_json(self, entry: LogEntry) -> str:
        """Format a log entry as a JSON object on one line."""
        obj = {
            "timestamp": entry.timestamp,
            "level": entry.level.value,
            "component": entry.component,
            "message": entry.message,
            "data": entry.data,
        }
        return json.dumps(obj, ensure_ascii=False, default=str)

    def format_text(self, entry: LogEntry) -> str:
        """Format a log entry as human-readable text."""
        # Format: [TIMESTAMP] LEVEL [COMPONENT] MESSAGE {data}
        parts = [
            f"[{entry.timestamp}]",
            entry.level.value.upper(),
            f"[{entry.component}]",
            entry.message,
        ]

        if entry.data:
            parts.append(json.dumps(entry.data, ensure_ascii=False, default=str))

        return " ".join(parts)


def create_logger(output_format: str = "text", level: str = "info") -> StructuredLogger:
    """Create a logger from configuration strings."""
    return StructuredLogger(output_format=output_format, level=LogLevel(level))
