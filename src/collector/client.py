"""
Vendor API Client Base

Async HTTP client shared by the keyword, backlink and search-console
clients, with:
- Connection pooling
- Automatic retry with exponential backoff
- Graceful error handling
- Request/response logging

Credentials are always passed in by the caller; clients never read the
environment.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)


@dataclass
class RetryConfig:
    """Configuration for retry behavior."""
    max_retries: int = 3
    initial_delay: float = 1.0
    max_delay: float = 10.0
    exponential_base: float = 2.0
    retryable_status_codes: tuple = (429, 500, 502, 503, 504)


class VendorAPIError(Exception):
    """Raised when a vendor API request fails."""
    def __init__(self, message: str, status_code: int = None, response: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class VendorAPIClient:
    """
    Base async client for a vendor HTTP API.

    Subclasses set BASE_URL and pass auth headers to __init__.

    Usage:
        async with SemrushClient(api_key="...") as client:
            keywords = await client.research_keywords("project management")
    """

    BASE_URL = ""
    SERVICE_NAME = "vendor"

    def __init__(
        self,
        headers: Optional[Dict[str, str]] = None,
        retry_config: Optional[RetryConfig] = None,
        max_connections: int = 10,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize client.

        Args:
            headers: Default headers (auth) for every request
            retry_config: Retry configuration (optional)
            max_connections: Maximum concurrent connections
            timeout: Request timeout in seconds
            transport: Custom httpx transport (tests use httpx.MockTransport)
        """
        self.retry_config = retry_config or RetryConfig()
        self.timeout = timeout
        self._transport = transport

        client_kwargs: Dict[str, Any] = {
            "headers": headers or {},
            "limits": httpx.Limits(
                max_connections=max_connections,
                max_keepalive_connections=max(1, max_connections // 2),
            ),
            "timeout": httpx.Timeout(timeout),
        }
        if self.BASE_URL:
            client_kwargs["base_url"] = self.BASE_URL
        if transport is not None:
            client_kwargs["transport"] = transport

        self._client = httpx.AsyncClient(**client_kwargs)
        self._closed = False

    async def request(
        self,
        method: str,
        url: str,
        retry: bool = True,
        **kwargs: Any,
    ) -> httpx.Response:
        """
        Make a request to the vendor API.

        Args:
            method: HTTP method
            url: Path relative to BASE_URL, or an absolute URL
            retry: Whether to retry on failure
            **kwargs: Passed to httpx (params, json, headers)

        Returns:
            Successful httpx.Response

        Raises:
            VendorAPIError: On API error
        """
        if self._closed:
            raise VendorAPIError(f"{self.SERVICE_NAME} client is closed")

        if retry:
            return await self._request_with_retry(method, url, **kwargs)
        return await self._make_request(method, url, **kwargs)

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("POST", url, **kwargs)

    async def get_json(self, url: str, **kwargs: Any) -> Any:
        return self.parse_json(await self.get(url, **kwargs))

    async def post_json(self, url: str, **kwargs: Any) -> Any:
        return self.parse_json(await self.post(url, **kwargs))

    def parse_json(self, response: httpx.Response) -> Any:
        """
        Decode a JSON response body.

        Raises:
            VendorAPIError: When a successful response carries a non-JSON
                body (maintenance pages, proxy errors)
        """
        try:
            return response.json()
        except ValueError as e:
            raise VendorAPIError(
                f"{self.SERVICE_NAME} returned a non-JSON body: {e}",
                status_code=response.status_code,
                response=response.text,
            )

    async def _make_request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Make a single HTTP request."""
        logger.debug(f"{self.SERVICE_NAME} {method} {url}")

        response = await self._client.request(method, url, **kwargs)

        if response.status_code >= 400:
            raise VendorAPIError(
                f"{self.SERVICE_NAME} request failed: {response.status_code}",
                status_code=response.status_code,
                response=response.text if response.content else None,
            )

        return response

    async def _request_with_retry(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Make request with automatic retry on failure."""
        last_exception = None
        delay = self.retry_config.initial_delay

        for attempt in range(self.retry_config.max_retries + 1):
            try:
                return await self._make_request(method, url, **kwargs)

            except VendorAPIError as e:
                last_exception = e

                # Don't retry client errors (4xx except 429)
                if e.status_code and e.status_code not in self.retry_config.retryable_status_codes:
                    raise

            except httpx.TimeoutException as e:
                last_exception = VendorAPIError(f"{self.SERVICE_NAME} request timed out: {e}")

            except httpx.HTTPError as e:
                last_exception = VendorAPIError(f"{self.SERVICE_NAME} HTTP error: {e}")

            if attempt < self.retry_config.max_retries:
                logger.warning(
                    f"{self.SERVICE_NAME} request failed "
                    f"(attempt {attempt + 1}/{self.retry_config.max_retries + 1}): "
                    f"{last_exception}. Retrying in {delay}s..."
                )
                await asyncio.sleep(delay)
                delay = min(
                    delay * self.retry_config.exponential_base,
                    self.retry_config.max_delay
                )

        raise last_exception

    async def close(self):
        """Close the HTTP client."""
        if not self._closed:
            await self._client.aclose()
            self._closed = True

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


def parse_int(value: Any) -> int:
    """Lenient int parsing; anything unparsable is 0."""
    try:
        return int(float(str(value).strip()))
    except (TypeError, ValueError):
        return 0


def parse_float(value: Any) -> float:
    """Lenient float parsing; anything unparsable (or NaN) is 0.0."""
    try:
        result = float(str(value).strip())
    except (TypeError, ValueError):
        return 0.0
    return result if result == result else 0.0
