"""
Data models for the Synergy Wholesale exporter.

This module defines the credentials, the domain records returned by the
listDomains operation, the request variant that produces them, and the
single cache slot that holds the most recent successful response.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .enums import ResponseStatus
from .exceptions import UpstreamError

# The API documentation does not name a timezone; expiry times for .com
# domains line up with Australia/Brisbane (+1000, no DST).
UPSTREAM_TIMEZONE = "Australia/Brisbane"
UPSTREAM_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
# strptime alone accepts unpadded and two-digit-year fields
UPSTREAM_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{2}:[0-9]{2}:[0-9]{2}")


def upstream_date_to_timestamp(date_string: str) -> int:
    """
    Convert an upstream date string to UTC epoch seconds.

    Args:
        date_string: Date in ``YYYY-MM-DD HH:MM:SS`` form, local to Brisbane

    Returns:
        Epoch seconds, or 0 when the string is empty or unparseable
    """
    if not date_string or not UPSTREAM_DATE_PATTERN.fullmatch(date_string):
        return 0

    try:
        location = ZoneInfo(UPSTREAM_TIMEZONE)
    except ZoneInfoNotFoundError:
        return 0

    try:
        parsed = datetime.strptime(date_string, UPSTREAM_DATE_FORMAT)
    except ValueError:
        return 0

    return int(parsed.replace(tzinfo=location).timestamp())


@dataclass(frozen=True)
class Credentials:
    """Reseller account credentials, fixed for the process lifetime."""

    reseller_id: str
    api_key: str = field(repr=False)


@dataclass
class DomainRecord:
    """A single domain from the listDomains response."""

    status: str
    domain_name: str
    error_message: Optional[str] = None
    domain_status: str = ""
    domain_created: str = ""
    domain_expiry: str = ""
    auto_renew: int = 0
    name_servers: list[str] = field(default_factory=list)
    dnssec_keys: list[str] = field(default_factory=list)

    @property
    def is_ok(self) -> bool:
        return self.status == ResponseStatus.OK.value

    @property
    def expiry_timestamp(self) -> int:
        return upstream_date_to_timestamp(self.domain_expiry)

    @property
    def creation_timestamp(self) -> int:
        return upstream_date_to_timestamp(self.domain_created)


@dataclass
class DomainListResponse:
    """Top-level result of the listDomains operation."""

    status: str = ""
    error_message: Optional[str] = None
    domains: list[DomainRecord] = field(default_factory=list)

    @property
    def is_ok(self) -> bool:
        return self.status == ResponseStatus.OK.value

    def ok_domains(self) -> list[DomainRecord]:
        """Return only records the upstream reports with status OK."""
        return [domain for domain in self.domains if domain.is_ok]

    def raise_for_status(self) -> None:
        """Raise UpstreamError if the upstream reported a non-OK status."""
        if not self.is_ok:
            raise UpstreamError(
                code="upstream_status",
                message=self.error_message or f"Upstream status: {self.status!r}",
                details={"status": self.status},
            )


@dataclass(frozen=True)
class ListDomainsRequest:
    """
    The listDomains operation.

    Each operation variant names its request and response elements and
    yields its parameters in the order the upstream validates them.
    """

    OPERATION: ClassVar[str] = "listDomains"
    RESPONSE_ELEMENT: ClassVar[str] = "listDomainsResponse"

    credentials: Credentials

    def params(self) -> list[tuple[str, str]]:
        return [
            ("apiKey", self.credentials.api_key),
            ("resellerID", self.credentials.reseller_id),
        ]


@dataclass(frozen=True)
class CacheEntry:
    """The cached listDomains response and the instant it goes stale."""

    data: DomainListResponse
    expires_at: float

    def is_fresh(self, now: float) -> bool:
        return now < self.expires_at
