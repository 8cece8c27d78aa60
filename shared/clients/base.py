"""Base HTTP client with retry logic and error handling."""

import asyncio
import logging
from typing import Any

import httpx

from shared.exceptions import ServiceUnavailableError

logger = logging.getLogger(__name__)


class BaseHTTPClient:
    """Base HTTP client with retry logic, timeout handling, and error management.

    Timeouts, connection errors and 5xx responses are retried with a linear
    backoff. 4xx responses are raised immediately as ``httpx.HTTPStatusError``
    so callers can map them (404 in particular) to domain errors.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        headers: dict[str, str] | None = None,
    ):
        """
        Initialize the HTTP client.

        Args:
            base_url: Base URL for the upstream API
            timeout: Request timeout in seconds
            max_retries: Maximum number of attempts per request
            retry_delay: Base delay between retries in seconds
            headers: Headers sent with every request (auth, API version)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.default_headers = dict(headers or {})
        self._client: httpx.AsyncClient | None = None

    def _build_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers=self.default_headers,
            follow_redirects=True,
        )

    async def __aenter__(self):
        """Async context manager entry."""
        self._client = self._build_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = self._build_client()
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _request_with_retry(
        self,
        method: str,
        path: str,
        **kwargs,
    ) -> httpx.Response:
        """
        Make HTTP request with retry logic.

        Args:
            method: HTTP method (GET, POST, PUT, PATCH, DELETE)
            path: Request path (appended to base_url) or an absolute URL
            **kwargs: Additional arguments to pass to httpx request

        Returns:
            httpx.Response object

        Raises:
            ServiceUnavailableError: If the upstream is unavailable after retries
            httpx.HTTPStatusError: If response has a 4xx status code
        """
        client = await self._get_client()
        last_exception: Exception | None = None

        for attempt in range(self.max_retries):
            try:
                response = await client.request(method, path, **kwargs)
                response.raise_for_status()
                return response

            except (httpx.TimeoutException, httpx.ConnectError) as e:
                last_exception = e
                if attempt < self.max_retries - 1:
                    logger.warning(
                        f"{method} {self.base_url}{path} failed (attempt {attempt + 1}/{self.max_retries}): {e}"
                    )
                    await asyncio.sleep(self.retry_delay * (attempt + 1))
                else:
                    logger.error(f"{method} {self.base_url}{path} failed after {self.max_retries} attempts")

            except httpx.HTTPStatusError as e:
                if e.response.status_code < 500:
                    raise
                last_exception = e
                if attempt < self.max_retries - 1:
                    logger.warning(
                        f"Server error {e.response.status_code} for {method} {self.base_url}{path} "
                        f"(attempt {attempt + 1}/{self.max_retries})"
                    )
                    await asyncio.sleep(self.retry_delay * (attempt + 1))
                else:
                    logger.error(
                        f"Server error {e.response.status_code} for {method} {self.base_url}{path} "
                        f"after {self.max_retries} attempts"
                    )

        raise ServiceUnavailableError(
            f"{self.base_url} is unavailable after {self.max_retries} attempts: {last_exception}"
        )

    async def get(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Make GET request."""
        return await self._request_with_retry("GET", path, params=params, headers=headers)

    async def post(
        self,
        path: str,
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Make POST request."""
        return await self._request_with_retry("POST", path, json=json, headers=headers)

    async def put(
        self,
        path: str,
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Make PUT request."""
        return await self._request_with_retry("PUT", path, json=json, headers=headers)

    async def patch(
        self,
        path: str,
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Make PATCH request."""
        return await self._request_with_retry("PATCH", path, json=json, headers=headers)

    async def delete(
        self,
        path: str,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Make DELETE request."""
        return await self._request_with_retry("DELETE", path, headers=headers)
