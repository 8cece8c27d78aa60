"""
FastAPI middleware for observability.

Provides automatic metrics collection for HTTP requests.
"""

import time
from collections.abc import Callable
from typing import Any

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from shared.observability.metrics import (
    http_request_duration_seconds,
    http_requests_in_progress,
    http_requests_total,
)


def _endpoint_label(request: Request) -> str:
    # Route templates keep share ids and SHAs out of label values
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class MetricsMiddleware(BaseHTTPMiddleware):
    """Middleware to collect HTTP metrics."""

    def __init__(self, app: Any, service_name: str):
        """
        Initialize metrics middleware.

        Args:
            app: FastAPI application
            service_name: Name of the service
        """
        super().__init__(app)
        self.service_name = service_name

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Process request and collect metrics.

        Args:
            request: HTTP request
            call_next: Next middleware in chain

        Returns:
            HTTP response
        """
        method = request.method
        in_progress = http_requests_in_progress.labels(service=self.service_name, method=method)
        in_progress.inc()

        start_time = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
        finally:
            duration = time.perf_counter() - start_time
            endpoint = _endpoint_label(request)

            in_progress.dec()

            http_requests_total.labels(
                service=self.service_name,
                method=method,
                endpoint=endpoint,
                status_code=status_code,
            ).inc()

            http_request_duration_seconds.labels(
                service=self.service_name,
                method=method,
                endpoint=endpoint,
            ).observe(duration)

        return response
