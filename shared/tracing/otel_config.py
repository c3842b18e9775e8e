"""OpenTelemetry configuration for distributed tracing.

Provides the tracer provider setup and a decorator that wraps sync and async
callables in spans. Spans are exported to the console; without
configure_tracing the OpenTelemetry API stays a no-op.
"""

import functools
import inspect
from typing import Any, Callable, Optional, TypeVar

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased
from opentelemetry.trace import Status, StatusCode

F = TypeVar("F", bound=Callable[..., Any])


def configure_tracing(
    service_name: str,
    service_version: str = "1.0.0",
    sampling_rate: float = 1.0,
) -> TracerProvider:
    """Configure OpenTelemetry tracing for the service.

    Args:
        service_name: Name of the service (e.g., "onion-movies-api")
        service_version: Version reported on every span
        sampling_rate: Sampling rate (0.0 to 1.0)

    Returns:
        Configured TracerProvider
    """
    resource = Resource(
        attributes={
            "service.name": service_name,
            "service.version": service_version,
        }
    )

    provider = TracerProvider(resource=resource, sampler=TraceIdRatioBased(sampling_rate))
    provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    # Set as global tracer provider
    trace.set_tracer_provider(provider)

    return provider


def get_tracer(name: str) -> trace.Tracer:
    """Get a tracer instance.

    Args:
        name: Tracer name (typically __name__)

    Returns:
        Tracer instance
    """
    return trace.get_tracer(name)


def trace_function(span_name: Optional[str] = None) -> Callable[[F], F]:
    """Decorator to automatically trace a function.

    Args:
        span_name: Optional custom span name (defaults to function name)

    Returns:
        Decorated function with automatic tracing
    """

    def decorator(func: F) -> F:
        name = span_name or func.__qualname__

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            tracer = get_tracer(func.__module__)

            with tracer.start_as_current_span(name) as span:
                span.set_attribute("code.function", func.__name__)
                span.set_attribute("code.namespace", func.__module__)
                try:
                    result = func(*args, **kwargs)
                    span.set_status(Status(StatusCode.OK))
                    return result
                except Exception as exc:
                    span.record_exception(exc)
                    span.set_status(Status(StatusCode.ERROR, str(exc)))
                    raise

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            tracer = get_tracer(func.__module__)

            with tracer.start_as_current_span(name) as span:
                span.set_attribute("code.function", func.__name__)
                span.set_attribute("code.namespace", func.__module__)
                try:
                    result = await func(*args, **kwargs)
                    span.set_status(Status(StatusCode.OK))
                    return result
                except Exception as exc:
                    span.record_exception(exc)
                    span.set_status(Status(StatusCode.ERROR, str(exc)))
                    raise

        if inspect.iscoroutinefunction(func):
            return async_wrapper  # type: ignore
        return sync_wrapper  # type: ignore

    return decorator
