"""
TTL cache for the listDomains response.

The cache holds a single entry (one upstream account per process). Reads
inside the TTL window are served from memory; a stale or empty cache is
refreshed by exactly one caller while concurrent callers wait for that
refresh and share its result.

State machine:
    EMPTY --success--> FRESH --ttl elapses--> STALE --success--> FRESH
    A failed refresh leaves the entry untouched, so STALE stays STALE and
    the next read retries immediately.
"""

import threading
import time
from typing import Callable, Optional

from .exceptions import UpstreamError
from .models import CacheEntry, DomainListResponse
from .structured_logger import StructuredLogger


class _Flight:
    """An in-progress refresh shared by every caller that observed it."""

    def __init__(self, result: DomainListResponse) -> None:
        self.done = threading.Event()
        self.result = result


class DomainListCache:
    """
    Single-slot TTL cache with single-flight refresh.

    Ensures:
    - At most one upstream request is in flight at any time
    - The entry is replaced wholesale, only after a successful refresh
    - Refresh failures never propagate to callers
    """

    COMPONENT = "cache"

    def __init__(
        self,
        fetch: Callable[[], DomainListResponse],
        ttl_seconds: float = 3600,
        clock: Callable[[], float] = time.monotonic,
        logger: Optional[StructuredLogger] = None,
    ) -> None:
        """
        Initialize the cache.

        Args:
            fetch: Performs one upstream refresh; any exception is a failed refresh
            ttl_seconds: How long a successful refresh stays fresh
            clock: Time source for expiry (seconds)
            logger: Optional structured logger
        """
        if ttl_seconds < 0:
            raise ValueError(f"ttl_seconds must be non-negative: {ttl_seconds}")

        self._fetch = fetch
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._logger = logger
        self._lock = threading.Lock()
        self._entry: Optional[CacheEntry] = None
        self._flight: Optional[_Flight] = None

    @property
    def ttl_seconds(self) -> float:
        return self._ttl_seconds

    @property
    def entry(self) -> Optional[CacheEntry]:
        """The current entry, fresh or stale; None before the first success."""
        return self._entry

    def invalidate(self) -> None:
        """Mark the current entry stale without discarding its data."""
        with self._lock:
            if self._entry is not None:
                self._entry = CacheEntry(data=self._entry.data, expires_at=self._clock())

    def get(self) -> DomainListResponse:
        """
        Return the cached response, refreshing it if stale or empty.

        Returns:
            Fresh data, the newly fetched data, or on refresh failure the
            previous entry's data (an empty response if there is none)
        """
        with self._lock:
            entry = self._entry
            if entry is not None and entry.is_fresh(self._clock()):
                return entry.data

            flight = self._flight
            leader = flight is None
            if leader:
                flight = self._flight = _Flight(self._fallback(entry))

        if not leader:
            flight.done.wait()
            return flight.result

        try:
            flight.result = self._refresh(flight.result)
        finally:
            with self._lock:
                self._flight = None
            flight.done.set()

        return flight.result

    def _fallback(self, entry: Optional[CacheEntry]) -> DomainListResponse:
        if entry is not None:
            return entry.data
        return DomainListResponse()

    def _refresh(self, fallback: DomainListResponse) -> DomainListResponse:
        """Run one upstream fetch and store its result on success."""
        try:
            response = self._fetch()
        except Exception as e:
            if self._logger:
                self._logger.log_error(
                    self.COMPONENT,
                    "Refresh failed, serving previous data",
                    error=e,
                    additional_data={"cached_domains": len(fallback.domains)},
                )
            return fallback

        with self._lock:
            self._entry = CacheEntry(
                data=response,
                expires_at=self._clock() + self._ttl_seconds,
            )

        if self._logger:
            try:
                response.raise_for_status()
            except UpstreamError as e:
                self._logger.warn(self.COMPONENT, "Upstream reported an error", {
                    "status": response.status,
                    "error_message": e.message,
                })
            self._logger.debug(self.COMPONENT, "Cache refreshed", {
                "domains": len(response.domains),
                "ttl_seconds": self._ttl_seconds,
            })

        return response
