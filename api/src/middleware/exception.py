"""
Exception translation middleware for FastAPI.

Turns exceptions escaping the routers into HTTP responses:
- ValidationException → 400 validation problem details (JSON)
- anything else → 500 plain text, logged with its traceback

Also provides the handler that reports malformed request bodies in the
same 400 problem format.
"""

import structlog
from fastapi import Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware

from api.src.exceptions import ValidationException, ValidationFailure
from api.src.responses import INTERNAL_ERROR_MESSAGE
from api.src.validation import to_json_string, to_problem_details

logger = structlog.get_logger(__name__)


class ExceptionMiddleware(BaseHTTPMiddleware):
    """Middleware translating unhandled exceptions into HTTP responses."""

    async def dispatch(self, request: Request, call_next) -> Response:
        """
        Run the rest of the chain and translate any exception it raises.

        Args:
            request: HTTP request
            call_next: Next middleware in chain

        Returns:
            HTTP response
        """
        try:
            return await call_next(request)

        except ValidationException as e:
            logger.info(
                "validation_exception",
                path=request.url.path,
                method=request.method,
                errors=to_json_string(e)
            )
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content=to_problem_details(e)
            )

        except Exception as e:
            logger.error(
                "unhandled_exception",
                path=request.url.path,
                method=request.method,
                error=str(e),
                exc_info=True
            )
            return PlainTextResponse(
                INTERNAL_ERROR_MESSAGE,
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
            )


async def request_validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Report unparseable request input as 400 validation problem details."""
    failures = [
        ValidationFailure(
            property_name=str(error["loc"][-1]) if error.get("loc") else "request",
            error_message=error["msg"]
        )
        for error in exc.errors()
    ]
    logger.warning(
        "request_validation_error",
        path=request.url.path,
        errors=to_json_string(failures)
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=to_problem_details(failures)
    )
