"""
Request logging and metrics middleware for FastAPI.

Provides:
- Correlation IDs (X-Correlation-ID, generated when absent)
- request_started / request_completed / request_failed log events
- Prometheus request counters, durations and in-flight gauge, labelled by
  route template
"""

import time
import uuid

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.routing import Match

from shared.logging import bind_context, unbind_context
from shared.metrics import setup_metrics

logger = structlog.get_logger(__name__)

# Paths that are not logged or counted
EXEMPT_PATHS = {"/metrics", "/health", "/ready"}

# Metric label for requests that match no route
UNMATCHED_ENDPOINT = "<unmatched>"


def route_template(request: Request) -> str:
    """
    Return the path template of the route serving the request.

    Metrics are labelled with the template (``/api/Movies/{movie_id}``) so
    the number of series stays bounded whatever ids clients send.
    """
    for route in request.app.router.routes:
        match, _ = route.matches(request.scope)
        if match == Match.FULL:
            return getattr(route, "path", UNMATCHED_ENDPOINT)
    return UNMATCHED_ENDPOINT


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for request logging and metrics."""

    def __init__(self, app, metrics_enabled: bool = True):
        """
        Initialize request logging middleware.

        Args:
            app: FastAPI application
            metrics_enabled: Record Prometheus metrics when True
        """
        super().__init__(app)
        self.metrics_enabled = metrics_enabled
        self.metrics, _ = setup_metrics()

    async def dispatch(self, request: Request, call_next) -> Response:
        """Process request and log details."""
        path = request.url.path
        if path in EXEMPT_PATHS:
            return await call_next(request)

        correlation_id = request.headers.get("X-Correlation-ID") or str(uuid.uuid4())
        method = request.method
        endpoint = route_template(request)
        client_ip = request.client.host if request.client else "unknown"

        bind_context(correlation_id=correlation_id)
        if self.metrics_enabled:
            self.metrics.requests_in_progress.labels(method=method, endpoint=endpoint).inc()

        start_time = time.time()

        logger.info(
            "request_started",
            method=method,
            path=path,
            client_ip=client_ip
        )

        try:
            response = await call_next(request)

            duration = time.time() - start_time

            if self.metrics_enabled:
                self.metrics.requests_total.labels(
                    method=method,
                    endpoint=endpoint,
                    status=response.status_code
                ).inc()
                self.metrics.request_duration.labels(
                    method=method,
                    endpoint=endpoint
                ).observe(duration)

            logger.info(
                "request_completed",
                method=method,
                path=path,
                status_code=response.status_code,
                duration=f"{duration:.3f}s"
            )

            response.headers["X-Correlation-ID"] = correlation_id
            return response

        except Exception as e:
            duration = time.time() - start_time
            logger.error(
                "request_failed",
                method=method,
                path=path,
                error=str(e),
                duration=f"{duration:.3f}s",
                exc_info=True
            )
            raise

        finally:
            if self.metrics_enabled:
                self.metrics.requests_in_progress.labels(method=method, endpoint=endpoint).dec()
            unbind_context("correlation_id")
