"""
HTTP Client Abstraction Layer.

Provides an HTTP client with built-in retry and rate limiting on top of
one shared aiohttp session.

Usage:
    from quotegateway.core import HttpClient, RetryPolicy, RateLimitPolicy

    client = HttpClient(
        retry_policy=RetryPolicy(max_retries=2),
        rate_limit_policy=RateLimitPolicy(requests_per_minute=5),
    )

    async with client:
        response = await client.get("https://www.alphavantage.co/query", params={"function": "GLOBAL_QUOTE"})
"""

import asyncio
import json
import logging
import time
from dataclasses import dataclass, field
from typing import Any

import aiohttp

logger = logging.getLogger(__name__)


@dataclass
class RetryPolicy:
    """
    Retry policy configuration.

    Attributes:
        max_retries: Maximum number of retry attempts
        base_delay: Base delay in seconds between retries
        max_delay: Maximum delay between retries
        exponential_base: Base for exponential backoff
        retryable_status_codes: HTTP status codes that trigger retry;
            timed-out attempts (status 0) are always retried
        retryable_exceptions: Exception types that trigger retry
    """
    max_retries: int = 2
    base_delay: float = 1.0
    max_delay: float = 30.0
    exponential_base: float = 2.0
    retryable_status_codes: set[int] = field(
        default_factory=lambda: {429, 500, 502, 503, 504}
    )
    retryable_exceptions: tuple[type[Exception], ...] = (
        aiohttp.ClientError,
        asyncio.TimeoutError,
    )

    def calculate_delay(self, attempt: int) -> float:
        """Calculate delay for a given retry attempt."""
        delay = self.base_delay * (self.exponential_base ** attempt)
        return min(delay, self.max_delay)


@dataclass
class RateLimitPolicy:
    """
    Client-side throttling.

    Attributes:
        requests_per_second: Maximum requests per second
        requests_per_minute: Maximum requests per minute
    """
    requests_per_second: float | None = None
    requests_per_minute: int | None = None

    @property
    def min_interval(self) -> float | None:
        """Minimum interval between requests in seconds."""
        if self.requests_per_second:
            return 1.0 / self.requests_per_second
        if self.requests_per_minute:
            return 60.0 / self.requests_per_minute
        return None


@dataclass
class HttpResponse:
    """
    HTTP response model.

    Attributes:
        status: HTTP status code, 0 when the request timed out
        reason: HTTP reason phrase
        headers: Response headers
        body: Response body as string
        json: Parsed JSON body, None when the body is not valid JSON
        elapsed: Time elapsed in seconds
        url: Requested URL
    """
    status: int = 0
    reason: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""
    json: dict[str, Any] | list[Any] | None = None
    elapsed: float = 0.0
    url: str = ""

    @property
    def ok(self) -> bool:
        """Check if response is successful (2xx)."""
        return 200 <= self.status < 300

    @property
    def timed_out(self) -> bool:
        return self.status == 0


class HttpClientError(Exception):
    """Raised when every attempt of a request failed with an exception."""

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class HttpClient:
    """
    HTTP client with retry and rate limiting.

    Usage:
        async with HttpClient() as client:
            response = await client.get("https://www.alphavantage.co/query")
            if response.ok:
                data = response.json
    """

    def __init__(
        self,
        retry_policy: RetryPolicy | None = None,
        rate_limit_policy: RateLimitPolicy | None = None,
        default_headers: dict[str, str] | None = None,
        default_timeout: float = 30.0,
    ) -> None:
        self.retry_policy = retry_policy or RetryPolicy()
        self.rate_limit_policy = rate_limit_policy
        self.default_headers = default_headers or {}
        self.default_timeout = default_timeout

        self._session: aiohttp.ClientSession | None = None
        self._last_request_time: float = 0.0

    async def __aenter__(self) -> "HttpClient":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def start(self) -> None:
        """Initialize the HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.default_timeout),
                headers=self.default_headers,
            )
            logger.debug("HTTP client session started")

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
            logger.debug("HTTP client session closed")

    async def _apply_rate_limit(self) -> None:
        if not self.rate_limit_policy:
            return

        min_interval = self.rate_limit_policy.min_interval
        if min_interval:
            elapsed = time.monotonic() - self._last_request_time
            if elapsed < min_interval:
                await asyncio.sleep(min_interval - elapsed)

    async def _execute_request(
        self,
        url: str,
        params: dict[str, Any],
        timeout: float,
    ) -> HttpResponse:
        """Execute a single GET request."""
        if self._session is None or self._session.closed:
            await self.start()

        await self._apply_rate_limit()

        start_time = time.monotonic()
        self._last_request_time = start_time

        try:
            async with self._session.get(
                url,
                params=params,
                timeout=aiohttp.ClientTimeout(total=timeout),
            ) as response:
                body = await response.text()

                try:
                    json_data = json.loads(body) if body else None
                except json.JSONDecodeError:
                    json_data = None

                return HttpResponse(
                    status=response.status,
                    reason=response.reason or "",
                    headers=dict(response.headers),
                    body=body,
                    json=json_data,
                    elapsed=time.monotonic() - start_time,
                    url=url,
                )

        except asyncio.TimeoutError:
            return HttpResponse(
                status=0,
                reason="timeout",
                elapsed=time.monotonic() - start_time,
                url=url,
            )

    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> HttpResponse:
        """
        Execute a GET request with retry logic.

        Args:
            url: Request URL
            params: Query parameters
            timeout: Request timeout

        Returns:
            HTTP response, possibly non-2xx

        Raises:
            HttpClientError: if every attempt raised a retryable exception
        """
        params = params or {}
        timeout = timeout or self.default_timeout

        last_response: HttpResponse | None = None
        last_exception: Exception | None = None

        for attempt in range(self.retry_policy.max_retries + 1):
            try:
                response = await self._execute_request(url, params, timeout)

                if response.ok:
                    return response

                if response.timed_out:
                    logger.warning(f"Request to {url} timed out (attempt {attempt + 1})")
                elif response.status not in self.retry_policy.retryable_status_codes:
                    return response

                last_response = response

            except self.retry_policy.retryable_exceptions as e:
                last_exception = e
                logger.warning(f"Request to {url} failed (attempt {attempt + 1}): {e}")

            if attempt < self.retry_policy.max_retries:
                delay = self.retry_policy.calculate_delay(attempt)
                logger.debug(f"Retrying in {delay:.2f}s...")
                await asyncio.sleep(delay)

        if last_response is not None:
            return last_response

        raise HttpClientError(
            f"Request failed after {self.retry_policy.max_retries} retries: {last_exception}",
            url=url,
        )
