"""FastAPI middleware components.

This package contains custom middleware for request/response processing:
exception translation and request logging with metrics.
"""

from api.src.middleware.exception import (
    ExceptionMiddleware,
    request_validation_exception_handler,
)
from api.src.middleware.request_logging import RequestLoggingMiddleware

__all__ = [
    "ExceptionMiddleware",
    "request_validation_exception_handler",
    "RequestLoggingMiddleware",
]
