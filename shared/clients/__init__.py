"""HTTP clients for upstream code-host APIs."""

from shared.clients.base import BaseHTTPClient
from shared.clients.config import HTTPClientSettings, http_client_settings

__all__ = [
    "BaseHTTPClient",
    "HTTPClientSettings",
    "http_client_settings",
]
