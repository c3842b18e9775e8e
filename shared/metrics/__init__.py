"""Metrics module using Prometheus."""

from .prometheus_metrics import (
    ApiMetrics,
    MovieMetrics,
    setup_metrics,
    get_metrics_handler,
)

__all__ = [
    "ApiMetrics",
    "MovieMetrics",
    "setup_metrics",
    "get_metrics_handler",
]
