"""
Mapping of service Results to HTTP responses for the result-based endpoints.
"""

from typing import Any, Callable, TypeVar

import structlog
from fastapi import status
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from api.src.exceptions import ValidationException
from api.src.result import Result
from api.src.validation import to_problem_details

logger = structlog.get_logger(__name__)

T = TypeVar("T")

INTERNAL_ERROR_MESSAGE = "An error occurred while processing your request."


def to_ok(result: Result[T], mapper: Callable[[T], Any]) -> Response:
    """
    Turn a Result into a response.

    Args:
        result: Service outcome
        mapper: Converts the success value into a JSON-serializable body

    Returns:
        200 with the mapped body, 400 with validation problem details for a
        ValidationException failure, 500 plain text for any other failure
    """
    def on_success(value: T) -> Response:
        return JSONResponse(status_code=status.HTTP_200_OK, content=mapper(value))

    def on_failure(error: Exception) -> Response:
        if isinstance(error, ValidationException):
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content=to_problem_details(error)
            )

        logger.error("result_failure", error_type=type(error).__name__, error=str(error))
        return PlainTextResponse(
            INTERNAL_ERROR_MESSAGE,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    return result.match(on_success, on_failure)
