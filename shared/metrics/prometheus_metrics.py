"""Prometheus metrics definitions and helpers.

Provides the metric definitions used by the movies API: HTTP traffic and
validation failures per error handling strategy.
"""

from functools import lru_cache
from typing import Callable

from prometheus_client import (
    Counter,
    Gauge,
    Histogram,
    generate_latest,
    REGISTRY,
    CollectorRegistry,
)


class ApiMetrics:
    """HTTP request metrics."""

    def __init__(self, registry: CollectorRegistry = REGISTRY) -> None:
        """Initialize API metrics.

        Args:
            registry: Prometheus registry to use
        """
        # Requests served
        self.requests_total = Counter(
            "http_requests_total",
            "Total HTTP requests",
            ["method", "endpoint", "status"],
            registry=registry,
        )

        # Request duration
        self.request_duration = Histogram(
            "http_request_duration_seconds",
            "HTTP request duration in seconds",
            ["method", "endpoint"],
            buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
            registry=registry,
        )

        # Requests in flight
        self.requests_in_progress = Gauge(
            "http_requests_in_progress",
            "HTTP requests currently in progress",
            ["method", "endpoint"],
            registry=registry,
        )


class MovieMetrics:
    """Movie service metrics."""

    def __init__(self, registry: CollectorRegistry = REGISTRY) -> None:
        """Initialize movie metrics.

        Args:
            registry: Prometheus registry to use
        """
        # Rejected entities, labelled by how the failure was reported
        self.validation_failures = Counter(
            "movies_validation_failures_total",
            "Total number of movies rejected by validation",
            ["strategy"],
            registry=registry,
        )

        # Repository writes that did not persist
        self.write_failures = Counter(
            "movies_write_failures_total",
            "Total number of movie writes the repository refused",
            ["operation"],
            registry=registry,
        )


@lru_cache()
def setup_metrics() -> tuple[ApiMetrics, MovieMetrics]:
    """Setup and return metric instances.

    Cached so the collectors are registered once per process.

    Returns:
        Tuple of (ApiMetrics, MovieMetrics)
    """
    api_metrics = ApiMetrics()
    movie_metrics = MovieMetrics()
    return api_metrics, movie_metrics


def get_metrics_handler() -> Callable[[], bytes]:
    """Get metrics handler for HTTP endpoint.

    Returns:
        Function that generates Prometheus metrics output
    """

    def metrics_handler() -> bytes:
        return generate_latest(REGISTRY)

    return metrics_handler
