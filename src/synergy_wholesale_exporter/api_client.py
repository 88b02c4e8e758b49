"""
API client for the Synergy Wholesale SOAP endpoint.

This module performs the HTTP exchange for an encoded envelope against the
fixed upstream URL and chains the SOAP codec around it for the listDomains
operation. Every failure of the exchange surfaces as a TransportError.
"""

from typing import Optional
import time

import httpx

from .config import DEFAULT_REQUEST_TIMEOUT_SECONDS, RetryConfig
from .enums import TransportErrorCode
from .exceptions import TransportError
from .models import Credentials, DomainListResponse, ListDomainsRequest
from .retry_manager import RetryManager
from .soap_codec import decode_response, encode_request
from .structured_logger import StructuredLogger

API_URL = "https://api.synergywholesale.com"

SOAP_HEADERS = {"Content-Type": "text/xml; charset=utf-8"}


class SynergyWholesaleClient:
    """
    Synchronous client for the Synergy Wholesale API.

    The client is stateless per call: each send() is one POST that either
    returns the raw response body or raises TransportError.
    """

    COMPONENT = "api_client"

    def __init__(
        self,
        endpoint: str = API_URL,
        timeout: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
        retry: Optional[RetryConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
        logger: Optional[StructuredLogger] = None,
    ) -> None:
        """
        Initialize the API client.

        Args:
            endpoint: Upstream URL
            timeout: Request deadline in seconds
            retry: Retry configuration; no retries when omitted
            transport: Optional httpx transport (used to stub the upstream)
            logger: Optional structured logger
        """
        self._endpoint = endpoint
        self._timeout = timeout
        self._retry_manager = RetryManager(retry or RetryConfig())
        self._logger = logger
        self._client = httpx.Client(
            verify=True,
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    def __enter__(self) -> "SynergyWholesaleClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def send(self, envelope: bytes) -> bytes:
        """
        POST an encoded envelope and return the raw response body.

        Args:
            envelope: Encoded request envelope

        Returns:
            Response body bytes

        Raises:
            TransportError: On connection failure, timeout, unreadable body
                or a non-2xx status code
        """
        start_time = time.perf_counter()

        try:
            response = self._client.post(
                self._endpoint,
                content=envelope,
                headers=SOAP_HEADERS,
            )
            body = response.read()
        except httpx.TimeoutException as e:
            raise TransportError(
                code=TransportErrorCode.TIMEOUT.value,
                message=f"Request timed out after {self._timeout}s",
                details={"endpoint": self._endpoint, "error": str(e)},
            )
        except httpx.ConnectError as e:
            error_msg = str(e)
            code = TransportErrorCode.NETWORK_ERROR
            if "ssl" in error_msg.lower() or "certificate" in error_msg.lower():
                code = TransportErrorCode.TLS_ERROR
            raise TransportError(
                code=code.value,
                message=f"Connection error: {error_msg}",
                details={"endpoint": self._endpoint},
            )
        except httpx.ReadError as e:
            raise TransportError(
                code=TransportErrorCode.READ_ERROR.value,
                message=f"Failed to read response body: {e}",
                details={"endpoint": self._endpoint},
            )
        except httpx.HTTPError as e:
            raise TransportError(
                code=TransportErrorCode.NETWORK_ERROR.value,
                message=f"HTTP exchange failed: {e}",
                details={"endpoint": self._endpoint},
            )

        if self._logger:
            self._logger.debug(self.COMPONENT, "Request successful", {
                "response_code": response.status_code,
                "response_time_ms": round(self._elapsed_ms(start_time), 1),
            })

        if not response.is_success:
            raise TransportError(
                code=TransportErrorCode.HTTP_ERROR.value,
                message=f"Unexpected HTTP status: {response.status_code}",
                details={
                    "endpoint": self._endpoint,
                    "http_status_code": response.status_code,
                },
            )

        return body

    def list_domains(self, credentials: Credentials) -> DomainListResponse:
        """
        Run the listDomains operation.

        Args:
            credentials: Reseller account credentials

        Returns:
            The decoded domain list

        Raises:
            TransportError: If the exchange fails (after any configured retries)
            ProtocolError: If the response cannot be decoded
        """
        envelope = encode_request(ListDomainsRequest(credentials=credentials))

        result = self._retry_manager.execute_with_retry(lambda: self.send(envelope))
        if not result.success:
            raise result.last_error

        if result.attempts > 1 and self._logger:
            self._logger.info(self.COMPONENT, "Request succeeded after retry", {
                "attempts": result.attempts,
            })

        return decode_response(result.result, ListDomainsRequest.OPERATION)

    def _elapsed_ms(self, start_time: float) -> float:
        """Calculate elapsed time in milliseconds."""
        return (time.perf_counter() - start_time) * 1000

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()
