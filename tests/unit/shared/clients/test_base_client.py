"""Tests for base HTTP client."""

from unittest.mock import AsyncMock, Mock, patch

import httpx
import pytest

from shared.clients.base import BaseHTTPClient
from shared.exceptions import ServiceUnavailableError


def status_response(status_code: int) -> Mock:
    """Mock response whose raise_for_status raises for the given status."""
    response = Mock()
    response.status_code = status_code
    response.raise_for_status.side_effect = httpx.HTTPStatusError(
        f"HTTP {status_code}", request=Mock(), response=response
    )
    return response


class TestBaseHTTPClient:
    """Test BaseHTTPClient functionality."""

    @pytest.mark.asyncio
    async def test_init(self):
        """Test client initialization."""
        client = BaseHTTPClient(
            base_url="https://api.github.com/",
            timeout=15,
            max_retries=4,
            retry_delay=0.5,
            headers={"Authorization": "Bearer token"},
        )

        assert client.base_url == "https://api.github.com"
        assert client.timeout == 15
        assert client.max_retries == 4
        assert client.retry_delay == 0.5
        assert client.default_headers == {"Authorization": "Bearer token"}

    @pytest.mark.asyncio
    async def test_context_manager(self):
        """Test async context manager."""
        async with BaseHTTPClient("https://gitlab.example.com/api/v4") as client:
            assert client._client is not None
            assert isinstance(client._client, httpx.AsyncClient)

        assert client._client is None

    @pytest.mark.asyncio
    async def test_default_headers_applied(self):
        """Test that default headers are set on the underlying client."""
        async with BaseHTTPClient(
            "https://gitlab.example.com/api/v4", headers={"PRIVATE-TOKEN": "secret"}
        ) as client:
            assert client._client.headers["PRIVATE-TOKEN"] == "secret"

    @pytest.mark.asyncio
    async def test_lazy_client_creation(self):
        """Test that the client is created on first request and reused."""
        client = BaseHTTPClient("https://api.github.com")
        assert client._client is None

        first = await client._get_client()
        second = await client._get_client()

        assert first is second
        await client.close()
        assert client._client is None

    @pytest.mark.asyncio
    async def test_get_request_success(self):
        """Test successful GET request."""
        mock_response = Mock()
        mock_response.status_code = 200
        mock_response.json.return_value = [{"version": "abc"}]

        mock_request = AsyncMock(return_value=mock_response)
        with patch("httpx.AsyncClient.request", new=mock_request):
            async with BaseHTTPClient("https://api.github.com") as client:
                response = await client.get("/gists/abc/commits", params={"page": 2})
                assert response.json() == [{"version": "abc"}]

        mock_request.assert_awaited_once_with(
            "GET", "/gists/abc/commits", params={"page": 2}, headers=None
        )

    @pytest.mark.asyncio
    async def test_post_request_success(self):
        """Test successful POST request."""
        mock_response = Mock()
        mock_response.status_code = 201
        mock_response.json.return_value = {"id": "123"}

        with patch("httpx.AsyncClient.request", new=AsyncMock(return_value=mock_response)):
            async with BaseHTTPClient("https://api.github.com") as client:
                response = await client.post("/gists", json={"files": {}})
                assert response.status_code == 201

    @pytest.mark.asyncio
    async def test_retry_on_timeout(self):
        """Test retry logic on timeout."""
        # First two calls timeout, third succeeds
        mock_response = Mock()
        mock_response.status_code = 200

        with patch(
            "httpx.AsyncClient.request",
            new=AsyncMock(
                side_effect=[
                    httpx.TimeoutException("Timeout"),
                    httpx.TimeoutException("Timeout"),
                    mock_response,
                ]
            ),
        ):
            async with BaseHTTPClient(
                "https://api.github.com", max_retries=3, retry_delay=0.01
            ) as client:
                response = await client.get("/gists/abc")
                assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_retry_on_connect_error(self):
        """Test retry logic on connection errors."""
        mock_response = Mock()
        mock_response.status_code = 200
        mock_request = AsyncMock(side_effect=[httpx.ConnectError("refused"), mock_response])

        with patch("httpx.AsyncClient.request", new=mock_request):
            async with BaseHTTPClient(
                "https://api.github.com", max_retries=3, retry_delay=0.01
            ) as client:
                await client.get("/gists/abc")

        assert mock_request.await_count == 2

    @pytest.mark.asyncio
    async def test_retry_on_server_error(self):
        """Test that 5xx responses are retried."""
        mock_response = Mock()
        mock_response.status_code = 200
        mock_request = AsyncMock(side_effect=[status_response(502), mock_response])

        with patch("httpx.AsyncClient.request", new=mock_request):
            async with BaseHTTPClient(
                "https://api.github.com", max_retries=3, retry_delay=0.01
            ) as client:
                response = await client.get("/gists/abc")

        assert response is mock_response
        assert mock_request.await_count == 2

    @pytest.mark.asyncio
    async def test_service_unavailable_after_retries(self):
        """Test ServiceUnavailableError after max retries."""
        with patch(
            "httpx.AsyncClient.request",
            new=AsyncMock(side_effect=httpx.TimeoutException("Timeout")),
        ):
            async with BaseHTTPClient(
                "https://api.github.com", max_retries=2, retry_delay=0.01
            ) as client:
                with pytest.raises(ServiceUnavailableError):
                    await client.get("/gists/abc")

    @pytest.mark.asyncio
    async def test_service_unavailable_after_server_errors(self):
        """Test ServiceUnavailableError when every attempt returns 5xx."""
        mock_request = AsyncMock(return_value=status_response(503))

        with patch("httpx.AsyncClient.request", new=mock_request):
            async with BaseHTTPClient(
                "https://api.github.com", max_retries=3, retry_delay=0.01
            ) as client:
                with pytest.raises(ServiceUnavailableError) as exc_info:
                    await client.get("/gists/abc")

        assert exc_info.value.error_code == "SERVICE_UNAVAILABLE"
        assert mock_request.await_count == 3

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [400, 401, 404, 422])
    async def test_no_retry_on_client_error(self, status_code):
        """Test that 4xx errors are not retried."""
        mock_request = AsyncMock(return_value=status_response(status_code))

        with patch("httpx.AsyncClient.request", new=mock_request):
            async with BaseHTTPClient("https://api.github.com") as client:
                with pytest.raises(httpx.HTTPStatusError) as exc_info:
                    await client.get("/gists/abc")

        assert exc_info.value.response.status_code == status_code
        assert mock_request.await_count == 1

    @pytest.mark.asyncio
    async def test_patch_request(self):
        """Test PATCH request."""
        mock_response = Mock()
        mock_response.status_code = 200

        with patch("httpx.AsyncClient.request", new=AsyncMock(return_value=mock_response)):
            async with BaseHTTPClient("https://api.github.com") as client:
                response = await client.patch("/gists/abc", json={"files": {}})
                assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_delete_request(self):
        """Test DELETE request."""
        mock_response = Mock()
        mock_response.status_code = 204

        with patch("httpx.AsyncClient.request", new=AsyncMock(return_value=mock_response)):
            async with BaseHTTPClient("https://api.github.com") as client:
                response = await client.delete("/gists/abc")
                assert response.status_code == 204

    @pytest.mark.asyncio
    async def test_put_request(self):
        """Test PUT request."""
        mock_response = Mock()
        mock_response.status_code = 200

        with patch("httpx.AsyncClient.request", new=AsyncMock(return_value=mock_response)):
            async with BaseHTTPClient("https://gitlab.example.com/api/v4") as client:
                response = await client.put("/projects/1/repository/files/a", json={"content": "x"})
                assert response.status_code == 200
