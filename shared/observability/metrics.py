"""
Prometheus metrics configuration and utilities.

Provides standardized metrics for HTTP requests, storage provider calls
and revision history walks.
"""

from prometheus_client import REGISTRY as DEFAULT_REGISTRY
from prometheus_client import Counter, Gauge, Histogram, generate_latest

# HTTP Metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["service", "method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["service", "method", "endpoint"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

http_requests_in_progress = Gauge(
    "http_requests_in_progress",
    "Number of HTTP requests in progress",
    ["service", "method"],
)


# Storage Provider Metrics
share_operations_total = Counter(
    "share_operations_total",
    "Total share operations sent to the storage provider",
    ["provider", "operation"],
)


# Revision History Metrics
history_batches_fetched_total = Counter(
    "history_batches_fetched_total",
    "Commit batches fetched while walking file history",
    ["provider"],
)

revision_comparisons_total = Counter(
    "revision_comparisons_total",
    "Revision content comparisons by outcome",
    ["provider", "outcome"],
)

history_walk_duration_seconds = Histogram(
    "history_walk_duration_seconds",
    "Time spent building one page of changed revisions",
    ["provider"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
)


def get_metrics() -> bytes:
    """
    Get current metrics in Prometheus format.

    Returns:
        Metrics in Prometheus text format
    """
    return generate_latest(DEFAULT_REGISTRY)
